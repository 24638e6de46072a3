# leadportal/forms/validators.py

import re

from wtforms import Form, StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, EqualTo, Length, Regexp

EMAIL_PATTERN = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+\Z')
NAME_PATTERN = re.compile(r'[a-zA-Z\s]+\Z')
# At least two characters once surrounding whitespace is trimmed
NAME_LENGTH_PATTERN = re.compile(r'.*\S.*\S', re.DOTALL)

PASSWORD_MISMATCH = 'Passwords do not match'

EMAIL_RULES = [
    DataRequired('Email is required'),
    Regexp(EMAIL_PATTERN, message='Please enter a valid email'),
]


class LoginFields(Form):
    """Login fields and their rule chains, usable outside a request."""
    email = StringField('Email Address', validators=EMAIL_RULES,
                        render_kw={'autocomplete': 'email'})
    password = PasswordField('Password', validators=[
        DataRequired('Password is required'),
        Length(min=6, message='Password must be at least 6 characters'),
    ], render_kw={'autocomplete': 'current-password'})


class SignupFields(Form):
    """Signup fields and their rule chains, usable outside a request."""
    full_name = StringField('Full Name', validators=[
        DataRequired('Full name is required'),
        Regexp(NAME_LENGTH_PATTERN, message='Name must be at least 2 characters'),
        Regexp(NAME_PATTERN, message='Name should only contain letters'),
    ], render_kw={'autocomplete': 'name'})
    email = StringField('Email Address', validators=EMAIL_RULES,
                        render_kw={'autocomplete': 'email'})
    password = PasswordField('Password', validators=[
        DataRequired('Password is required'),
        Length(min=8, message='Password must be at least 8 characters'),
        Regexp(r'.*[a-z]', flags=re.DOTALL, message='Password must contain a lowercase letter'),
        Regexp(r'.*[A-Z]', flags=re.DOTALL, message='Password must contain an uppercase letter'),
        Regexp(r'.*[0-9]', flags=re.DOTALL, message='Password must contain a number'),
    ], render_kw={'autocomplete': 'new-password'})
    confirm_password = PasswordField('Confirm Password', validators=[
        DataRequired('Please confirm your password'),
        EqualTo('password', message=PASSWORD_MISMATCH),
    ], render_kw={'autocomplete': 'new-password'})
    agree_terms = BooleanField('I agree to the Terms of Service and Privacy Policy', validators=[
        DataRequired('You must agree to the terms and conditions'),
    ])


def _first_error(fields_form, name, value, context):
    data = dict(context or {})
    data[name] = value
    form = fields_form(data=data)
    if name not in form:
        return ''
    field = form[name]
    field.validate(form)
    return field.errors[0] if field.errors else ''


def validate_login_field(name, value, context=None):
    """Returns the login page's error message for one field, or ''."""
    return _first_error(LoginFields, name, value, context)


def validate_signup_field(name, value, context=None):
    """
    Returns the signup page's error message for one field, or ''.

    ``context`` is the form's current values; only ``confirm_password``
    reads it, to compare against ``password``.
    """
    return _first_error(SignupFields, name, value, context)
