# leadportal/auth/controllers.py

import logging

from leadportal.forms.state import FormState
from leadportal.forms.validators import PASSWORD_MISMATCH, validate_login_field, validate_signup_field
from leadportal.models.submission import profile_record

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = 'An unexpected error occurred. Please try again.'
PROFILE_SAVE_ERROR = 'Account created but failed to save profile data. Please contact support.'

LOGIN_INITIAL = {'email': '', 'password': ''}
SIGNUP_INITIAL = {
    'full_name': '',
    'email': '',
    'password': '',
    'confirm_password': '',
    'agree_terms': False,
}


def new_login_state():
    return FormState(LOGIN_INITIAL, validate_login_field)


def new_signup_state():
    return FormState(
        SIGNUP_INITIAL,
        validate_signup_field,
        dependents={'password': {'confirm_password': PASSWORD_MISMATCH}},
    )


class SubmissionController:
    """
    Runs one submit attempt of a form: validates everything, calls the
    backend, and maps the outcome onto the form's SubmissionStatus.

    Subclasses implement ``_perform``. No retries happen here; every
    failure is final for the attempt.
    """

    def __init__(self, state, navigator):
        self.state = state
        self.navigator = navigator

    def submit(self):
        """Returns True when the backend was called, False when validation blocked it."""
        if self.state.disabled:
            return False

        errors = self.state.validate_all()
        if errors:
            return False

        self.state.begin_submit()
        try:
            self._perform(dict(self.state.values))
        except Exception:
            logger.exception('%s submission failed', type(self).__name__)
            self.state.fail(UNEXPECTED_ERROR)
        finally:
            self.state.settle()
        return True

    def _perform(self, values):
        raise NotImplementedError

    def teardown(self):
        pass


class LoginController(SubmissionController):

    def __init__(self, account_service, navigator, landing_path='/', state=None):
        super().__init__(state or new_login_state(), navigator)
        self.account_service = account_service
        self.landing_path = landing_path
        self.identity = None

    def _perform(self, values):
        result = self.account_service.create_session(values['email'], values['password'])

        if not result.ok:
            self.state.fail(result.error_message)
            return

        self.state.succeed()
        if result.identity is not None:
            self.identity = result.identity
            logger.info('Signed in %s', result.identity.email)
            self.navigator.navigate_to(self.landing_path)


class SignupController(SubmissionController):

    def __init__(self, account_service, records_store, navigator, redirect_target,
                 login_path='/login', redirect_delay=2, profile_table='users', state=None):
        super().__init__(state or new_signup_state(), navigator)
        self.account_service = account_service
        self.records_store = records_store
        self.redirect_target = redirect_target
        self.login_path = login_path
        self.redirect_delay = redirect_delay
        self.profile_table = profile_table
        self.pending_navigation = None

    def _perform(self, values):
        # Step 1: create the identity
        result = self.account_service.create_identity(
            values['email'],
            values['password'],
            {'full_name': values['full_name']},
            self.redirect_target,
        )

        if not result.ok:
            self.state.fail(result.error_message)
            return

        if result.identity is None:
            return

        # Step 2: store the profile row, only after the identity exists
        record = profile_record(result.identity.id, values['email'], values['full_name'])
        inserted = self.records_store.insert_record(self.profile_table, record)

        if not inserted.ok:
            # The identity stays; it is surfaced, not rolled back
            logger.error('Profile insert failed for %s: %s', result.identity.id, inserted.error_message)
            self.state.fail(PROFILE_SAVE_ERROR)
            return

        logger.info('Created account %s', result.identity.id)
        self.state.succeed()
        self.state.reset()
        self.pending_navigation = self.navigator.schedule(self.redirect_delay, self.login_path)

    def teardown(self):
        if self.pending_navigation is not None:
            self.pending_navigation.cancel()
