# leadportal/models/user.py

from flask_login import UserMixin


class PortalUser(UserMixin):
    """The signed-in identity as Flask-Login sees it."""

    def __init__(self, identity):
        self.identity = identity

    def get_id(self):
        return self.identity.id

    @property
    def email(self):
        return self.identity.email

    @property
    def full_name(self):
        return self.identity.full_name or self.identity.email

    def __repr__(self):
        return f'<PortalUser {self.identity.email}>'


def load_portal_user(user_id):
    """Rebuilds the user from the hosted session; None once the session is gone."""
    from leadportal.services import get_account_service

    result = get_account_service().get_current_session()
    if not result.ok or result.session is None:
        return None
    if result.session.identity.id != user_id:
        return None
    return PortalUser(result.session.identity)
