# leadportal/services/__init__.py

from flask import current_app, g, session

from .base import (
    AccountService,
    AuthSession,
    BackendConfigError,
    BackendConnection,
    Identity,
    RecordsStore,
    ServiceResult,
    Subscription,
)

EXTENSION_KEY = 'leadportal.backend'


def init_backend(app, backend=None):
    """Registers the hosted backend; a Supabase backend is built from config when none is given."""
    if backend is None:
        from .supabase_backend import SupabaseBackend
        backend = SupabaseBackend.from_config(app.config)
    app.extensions[EXTENSION_KEY] = backend
    return backend


def get_connection():
    """Returns this request's backend connection, creating it on first use."""
    if 'backend_connection' not in g:
        backend = current_app.extensions[EXTENSION_KEY]
        g.backend_connection = backend.connect(session)
    return g.backend_connection


def get_account_service():
    return get_connection().account_service


def get_records_store():
    return get_connection().records_store
