"""Shared fixtures for lead portal tests: in-memory backend fakes and the Flask app."""

from __future__ import annotations

import uuid
from collections import defaultdict

import pytest

from leadportal import create_app
from leadportal.navigation import Navigator
from leadportal.services.base import (
    SIGNED_OUT,
    AccountService,
    AuthSession,
    BackendConnection,
    Identity,
    RecordsStore,
    ServiceResult,
    Subscription,
)

SESSION_KEY = 'fake_identity_id'


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------

class FakeBackend:
    """Accounts and tables shared by every connection, like a hosted project."""

    def __init__(self):
        self.accounts = {}
        self.tables = defaultdict(list)
        self.calls = []
        # operation name -> error message (str) or exception instance
        self.failures = {}
        self.listeners = []
        self.last_redirect_target = None

    def add_account(self, email, password, full_name=''):
        identity = Identity(id=str(uuid.uuid4()), email=email, metadata={'full_name': full_name})
        self.accounts[email] = {'password': password, 'identity': identity}
        return identity

    def add_submission(self, **overrides):
        row = {
            'id': str(uuid.uuid4()),
            'full_name': 'Ada Lovelace',
            'email': 'ada@example.com',
            'phone': '555-0100',
            'timeline': '1-3 months',
            'budget': '$5k-$10k',
            'project_details': 'Landing page refresh',
            'hear_about': 'Google',
            'created_at': '2024-05-01T10:00:00+00:00',
        }
        row.update(overrides)
        self.tables['contact_submissions'].append(row)
        return row

    def check(self, operation):
        self.calls.append(operation)
        failure = self.failures.get(operation)
        if isinstance(failure, Exception):
            raise failure
        if failure:
            return ServiceResult.failure(failure)
        return None

    def emit(self, event, session):
        for callback in list(self.listeners):
            callback(event, session)

    def connect(self, session_store):
        return BackendConnection(
            FakeAccountService(self, session_store),
            FakeRecordsStore(self),
        )


class FakeAccountService(AccountService):

    def __init__(self, backend, session_store):
        self.backend = backend
        self.session_store = session_store

    def create_session(self, email, password):
        failed = self.backend.check('create_session')
        if failed:
            return failed
        account = self.backend.accounts.get(email)
        if account is None or account['password'] != password:
            return ServiceResult.failure('Invalid login credentials')
        identity = account['identity']
        self.session_store[SESSION_KEY] = identity.id
        return ServiceResult(identity=identity, session=AuthSession(identity, 'access', 'refresh'))

    def create_identity(self, email, password, profile_hints, redirect_target):
        self.backend.last_redirect_target = redirect_target
        failed = self.backend.check('create_identity')
        if failed:
            return failed
        if email in self.backend.accounts:
            return ServiceResult.failure('User already registered')
        identity = self.backend.add_account(email, password, profile_hints.get('full_name', ''))
        return ServiceResult(identity=identity)

    def get_current_session(self):
        failed = self.backend.check('get_current_session')
        if failed:
            return failed
        identity_id = self.session_store.get(SESSION_KEY)
        for account in self.backend.accounts.values():
            if account['identity'].id == identity_id:
                return ServiceResult(session=AuthSession(account['identity'], 'access', 'refresh'))
        return ServiceResult()

    def subscribe_session_changes(self, callback):
        self.backend.listeners.append(callback)
        return Subscription(lambda: self.backend.listeners.remove(callback))

    def end_session(self):
        failed = self.backend.check('end_session')
        if failed:
            return failed
        self.session_store.pop(SESSION_KEY, None)
        self.backend.emit(SIGNED_OUT, None)
        return ServiceResult()


class FakeRecordsStore(RecordsStore):

    def __init__(self, backend):
        self.backend = backend

    def insert_record(self, table, record):
        failed = self.backend.check('insert_record')
        if failed:
            return failed
        self.backend.tables[table].append(dict(record))
        return ServiceResult()

    def query_records(self, table, sort_field, ascending):
        failed = self.backend.check('query_records')
        if failed:
            return failed
        rows = sorted(self.backend.tables[table], key=lambda r: r.get(sort_field) or '', reverse=not ascending)
        return ServiceResult(records=[dict(r) for r in rows])

    def delete_record(self, table, record_id):
        failed = self.backend.check('delete_record')
        if failed:
            return failed
        self.backend.tables[table] = [r for r in self.backend.tables[table] if r['id'] != record_id]
        return ServiceResult()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def session_store():
    return {}


@pytest.fixture
def connection(backend, session_store):
    return backend.connect(session_store)


@pytest.fixture
def account_service(connection):
    return connection.account_service


@pytest.fixture
def records_store(connection):
    return connection.records_store


@pytest.fixture
def navigator():
    return Navigator()


@pytest.fixture
def signed_in(backend, session_store):
    """An existing account with an active session in ``session_store``."""
    identity = backend.add_account('admin@example.com', 'Secret123', 'Admin User')
    session_store[SESSION_KEY] = identity.id
    return identity


@pytest.fixture
def app(backend):
    app = create_app('testing', backend=backend)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_client(client, backend):
    """A test client already signed in through the login form."""
    backend.add_account('admin@example.com', 'Secret123', 'Admin User')
    response = client.post('/login', data={'email': 'admin@example.com', 'password': 'Secret123'})
    assert response.status_code == 302
    return client
