# leadportal/services/base.py

"""
Interfaces of the hosted backend as seen by the controllers.

Controllers receive an AccountService and a RecordsStore at construction
time; the Supabase adapters implement them for production and the test
suite substitutes in-memory fakes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class BackendConfigError(RuntimeError):
    """Raised when the hosted backend cannot be configured."""


@dataclass
class Identity:
    id: str
    email: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def full_name(self):
        return self.metadata.get('full_name', '')


@dataclass
class AuthSession:
    identity: Identity
    access_token: str = ''
    refresh_token: str = ''


@dataclass
class ServiceResult:
    """Outcome of one backend call: an error message or a payload."""
    error_message: Optional[str] = None
    identity: Optional[Identity] = None
    session: Optional[AuthSession] = None
    records: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self):
        return self.error_message is None

    @classmethod
    def failure(cls, message):
        return cls(error_message=message or 'Unknown error')


class Subscription:
    """Handle for a session-change listener; ``unsubscribe`` is idempotent."""

    def __init__(self, release):
        self._release = release
        self.active = True

    def unsubscribe(self):
        if self.active:
            self.active = False
            self._release()


# Session change events delivered to subscribers
SIGNED_IN = 'SIGNED_IN'
SIGNED_OUT = 'SIGNED_OUT'
TOKEN_REFRESHED = 'TOKEN_REFRESHED'


class AccountService(ABC):

    @abstractmethod
    def create_session(self, email, password) -> ServiceResult:
        """Signs in with email and password."""

    @abstractmethod
    def create_identity(self, email, password, profile_hints, redirect_target) -> ServiceResult:
        """Registers a new identity; ``redirect_target`` is the confirmation link target."""

    @abstractmethod
    def get_current_session(self) -> ServiceResult:
        """Returns the active session, if any."""

    @abstractmethod
    def subscribe_session_changes(self, callback) -> Subscription:
        """Calls ``callback(event, session)`` on every session change."""

    @abstractmethod
    def end_session(self) -> ServiceResult:
        """Signs out."""


class RecordsStore(ABC):

    @abstractmethod
    def insert_record(self, table, record) -> ServiceResult:
        pass

    @abstractmethod
    def query_records(self, table, sort_field, ascending) -> ServiceResult:
        pass

    @abstractmethod
    def delete_record(self, table, record_id) -> ServiceResult:
        pass


class BackendConnection:
    """The account service and records store for one request."""

    def __init__(self, account_service, records_store):
        self.account_service = account_service
        self.records_store = records_store
