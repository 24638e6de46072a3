# leadportal/auth/forms.py

from flask_wtf import FlaskForm
from wtforms import BooleanField, SubmitField
from leadportal.forms.validators import LoginFields, SignupFields

# Field rules are declared on LoginFields/SignupFields; the FormState runs
# them one field at a time, so these classes add CSRF and the submit button.

class LoginForm(FlaskForm, LoginFields):
    """Form for signing in."""
    submit = SubmitField('Sign In')


class SignupForm(FlaskForm, SignupFields):
    """Form for creating a new account."""
    submit = SubmitField('Create Account')


def form_values(form, fields):
    """Reads the submitted data of ``fields`` as FormValues."""
    values = {}
    for name in fields:
        field = getattr(form, name)
        if isinstance(field, BooleanField):
            values[name] = bool(field.data)
        else:
            values[name] = field.data or ''
    return values
