# leadportal/forms/state.py

import enum


class SubmissionStatus(enum.Enum):
    IDLE = 'idle'
    SUBMITTING = 'submitting'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


class FormState:
    """
    Values, touched flags, error messages and submission status for one
    form instance. A login page and a signup page each own their own
    instance; nothing here is shared or does I/O.
    """

    def __init__(self, initial_values, validator, dependents=None):
        self.initial_values = dict(initial_values)
        self.validator = validator
        # field -> {dependent: message}; a touched dependent must equal the field
        self.dependents = dependents or {}

        self.values = dict(self.initial_values)
        self.touched = {}
        self.errors = {}
        self.status = SubmissionStatus.IDLE
        self.submit_error = ''

    @property
    def fields(self):
        return tuple(self.initial_values)

    def _validate(self, field, value=None, values=None):
        values = self.values if values is None else values
        value = values.get(field) if value is None else value
        return self.validator(field, value, values)

    # --- Field events ---

    def on_change(self, field, value):
        self.values[field] = value

        if self.touched.get(field):
            self.errors[field] = self._validate(field, value)

        for dependent, mismatch in self.dependents.get(field, {}).items():
            if self.touched.get(dependent):
                current = self.values.get(dependent)
                # An empty dependent keeps its own "required" message
                # for blur/submit; a change elsewhere only clears it.
                if current and current != value:
                    self.errors[dependent] = mismatch
                else:
                    self.errors[dependent] = ''

    def on_blur(self, field, value):
        self.values[field] = value
        self.touched[field] = True
        self.errors[field] = self._validate(field, value)

    def validate_all(self):
        """Validates every field, marks them all touched and returns the ErrorMap."""
        errors = {}
        for field in self.fields:
            message = self._validate(field)
            if message:
                errors[field] = message
        self.errors = errors
        self.touched = {field: True for field in self.fields}
        return errors

    # --- Derived views ---

    @property
    def has_errors(self):
        return any(self.errors.values())

    def visible_errors(self):
        return {
            field: message
            for field, message in self.errors.items()
            if message and self.touched.get(field)
        }

    @property
    def disabled(self):
        return self.status is SubmissionStatus.SUBMITTING

    # --- Submission lifecycle ---

    def begin_submit(self):
        self.status = SubmissionStatus.SUBMITTING
        self.submit_error = ''

    def succeed(self):
        self.status = SubmissionStatus.SUCCEEDED
        self.submit_error = ''

    def fail(self, message):
        self.status = SubmissionStatus.FAILED
        self.submit_error = message

    def settle(self):
        """Moves a submission still marked SUBMITTING to a resting status."""
        if self.status is SubmissionStatus.SUBMITTING:
            self.status = SubmissionStatus.SUCCEEDED

    def reset(self):
        self.values = dict(self.initial_values)
        self.touched = {}
        self.errors = {}

    def coerce(self, field, value):
        if isinstance(self.initial_values.get(field), bool):
            return bool(value)
        return '' if value is None else str(value)

    def load(self, values, touched=None):
        """Restores values (and touched flags) carried by a request."""
        for field in self.fields:
            if field in values:
                self.values[field] = self.coerce(field, values[field])
        for field in touched or ():
            if field in self.initial_values:
                self.touched[field] = True

    def snapshot(self, include_secrets=False):
        values = dict(self.values)
        if not include_secrets:
            for field in ('password', 'confirm_password'):
                if field in values:
                    values[field] = ''
        return {
            'values': values,
            'touched': sorted(f for f, t in self.touched.items() if t),
            'errors': self.visible_errors(),
            'status': self.status.value,
            'submit_error': self.submit_error,
            'disabled': self.disabled,
        }
