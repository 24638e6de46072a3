# leadportal/services/supabase_backend.py

"""
Supabase adapters for the AccountService and RecordsStore interfaces.

One ``supabase.Client`` is created per request. The signed-in user's
tokens live in the Flask session (any mutable mapping works) and are
restored onto the client with ``auth.set_session`` so row-level security
sees the right user.
"""

import logging

from postgrest.exceptions import APIError
from supabase import AuthError, create_client

from .base import (
    SIGNED_OUT,
    AccountService,
    AuthSession,
    BackendConfigError,
    BackendConnection,
    Identity,
    RecordsStore,
    ServiceResult,
    Subscription,
)

logger = logging.getLogger(__name__)

TOKEN_KEY = 'supabase_tokens'


def _identity_from_user(user):
    if user is None:
        return None
    return Identity(
        id=str(user.id),
        email=user.email or '',
        metadata=dict(user.user_metadata or {}),
    )


def _session_from_response(session, user=None):
    if session is None:
        return None
    identity = _identity_from_user(user or session.user)
    return AuthSession(
        identity=identity,
        access_token=session.access_token,
        refresh_token=session.refresh_token,
    )


class SupabaseAccountService(AccountService):

    def __init__(self, client, session_store):
        self.client = client
        self.session_store = session_store

    # --- Token persistence ---

    def _remember(self, session):
        if session is None:
            return
        self.session_store[TOKEN_KEY] = {
            'access_token': session.access_token,
            'refresh_token': session.refresh_token,
        }

    def _forget(self):
        self.session_store.pop(TOKEN_KEY, None)

    def _restore(self):
        tokens = self.session_store.get(TOKEN_KEY)
        if not tokens:
            return None
        try:
            response = self.client.auth.set_session(tokens['access_token'], tokens['refresh_token'])
        except AuthError as e:
            # Expired or revoked refresh token
            logger.info('Discarding stored session: %s', e.message)
            self._forget()
            return None
        self._remember(response.session)
        return response.session

    # --- AccountService ---

    def create_session(self, email, password):
        try:
            response = self.client.auth.sign_in_with_password({
                'email': email,
                'password': password,
            })
        except AuthError as e:
            return ServiceResult.failure(e.message)

        self._remember(response.session)
        return ServiceResult(
            identity=_identity_from_user(response.user),
            session=_session_from_response(response.session, response.user),
        )

    def create_identity(self, email, password, profile_hints, redirect_target):
        try:
            response = self.client.auth.sign_up({
                'email': email,
                'password': password,
                'options': {
                    'data': dict(profile_hints),
                    'email_redirect_to': redirect_target,
                },
            })
        except AuthError as e:
            return ServiceResult.failure(e.message)

        return ServiceResult(identity=_identity_from_user(response.user))

    def get_current_session(self):
        try:
            session = self.client.auth.get_session() or self._restore()
        except AuthError as e:
            return ServiceResult.failure(e.message)

        return ServiceResult(session=_session_from_response(session))

    def subscribe_session_changes(self, callback):
        def on_change(event, session):
            if event == SIGNED_OUT:
                self._forget()
            else:
                self._remember(session)
            callback(event, _session_from_response(session))

        handle = self.client.auth.on_auth_state_change(on_change)
        return Subscription(handle.unsubscribe)

    def end_session(self):
        try:
            # sign_out only revokes the hosted session when the client holds one
            self.client.auth.get_session() or self._restore()
            self.client.auth.sign_out()
        except AuthError as e:
            return ServiceResult.failure(e.message)
        self._forget()
        return ServiceResult()


class SupabaseRecordsStore(RecordsStore):

    def __init__(self, client):
        self.client = client

    def insert_record(self, table, record):
        try:
            self.client.table(table).insert(record).execute()
        except APIError as e:
            return ServiceResult.failure(e.message)
        return ServiceResult()

    def query_records(self, table, sort_field, ascending):
        try:
            response = self.client.table(table) \
                .select('*') \
                .order(sort_field, desc=not ascending) \
                .execute()
        except APIError as e:
            return ServiceResult.failure(e.message)
        return ServiceResult(records=list(response.data or []))

    def delete_record(self, table, record_id):
        try:
            self.client.table(table).delete().eq('id', record_id).execute()
        except APIError as e:
            return ServiceResult.failure(e.message)
        return ServiceResult()


class SupabaseBackend:

    def __init__(self, url, key):
        if not url or not key:
            raise BackendConfigError(
                'Supabase credentials not configured. '
                'Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables.'
            )
        self.url = url
        self.key = key

    @classmethod
    def from_config(cls, config):
        return cls(config.get('SUPABASE_URL'), config.get('SUPABASE_ANON_KEY'))

    def connect(self, session_store):
        client = create_client(self.url, self.key)
        return BackendConnection(
            SupabaseAccountService(client, session_store),
            SupabaseRecordsStore(client),
        )
