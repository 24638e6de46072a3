# leadportal/admin/controller.py

import csv
import io
import logging
from contextlib import contextmanager

from leadportal.models.submission import ContactSubmission, RecordSchemaError
from leadportal.services.base import SIGNED_OUT

logger = logging.getLogger(__name__)

CSV_HEADERS = ['Date', 'Name', 'Email', 'Phone', 'Timeline', 'Budget', 'Project Details', 'Heard About Us']

SORT_CHOICES = [
    ('created_at', 'Sort by Date'),
    ('full_name', 'Sort by Name'),
    ('budget', 'Sort by Budget'),
]
SORT_KEYS = {key for key, _ in SORT_CHOICES}
DEFAULT_SORT = 'created_at'
DEFAULT_ORDER = 'desc'


def submissions_to_csv(submissions):
    """Header row first, then one row per submission; every field quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    buffer.write(','.join(CSV_HEADERS) + '\n')
    for submission in submissions:
        writer.writerow(submission.csv_row())
    return buffer.getvalue().rstrip('\n')


class AdminListController:
    """
    Session-gated list of contact form submissions.

    ``mount`` checks the session before anything is fetched and subscribes
    to session changes; ``teardown`` releases that subscription. Prefer
    ``with controller.mounted():`` so the release happens on every path.
    """

    def __init__(self, account_service, records_store, navigator,
                 table='contact_submissions', login_path='/login'):
        self.account_service = account_service
        self.records_store = records_store
        self.navigator = navigator
        self.table = table
        self.login_path = login_path

        self.identity = None
        self.subscription = None
        self.submissions = []
        self.error = None
        self.loaded = False

        self.search_term = ''
        self.sort_by = DEFAULT_SORT
        self.sort_order = DEFAULT_ORDER
        self.selected = None

    # --- Lifecycle ---

    @property
    def authenticated(self):
        return self.identity is not None

    def mount(self):
        """Returns True when a session is active and the list was fetched."""
        try:
            result = self.account_service.get_current_session()
        except Exception:
            logger.exception('Auth check error')
            result = None

        if result is None or not result.ok or result.session is None:
            self.navigator.router_push(self.login_path)
            return False

        self.identity = result.session.identity
        self.subscription = self.account_service.subscribe_session_changes(self._on_session_change)
        self.fetch()
        return True

    def teardown(self):
        if self.subscription is not None:
            self.subscription.unsubscribe()
            self.subscription = None

    @contextmanager
    def mounted(self):
        try:
            self.mount()
            yield self
        finally:
            self.teardown()

    def _on_session_change(self, event, session):
        if event == SIGNED_OUT or session is None:
            self.identity = None
            self.navigator.router_push(self.login_path)
        else:
            self.identity = session.identity

    # --- Remote collection ---

    def fetch(self):
        result = self.records_store.query_records(self.table, self.sort_by, self.sort_order == 'asc')
        self.loaded = True

        if not result.ok:
            logger.error('Error fetching submissions: %s', result.error_message)
            self.error = result.error_message
            return False

        try:
            self.submissions = [ContactSubmission.from_row(row) for row in result.records]
        except RecordSchemaError as e:
            logger.error('Error fetching submissions: %s', e)
            self.error = str(e)
            return False

        self.error = None
        return True

    def set_sort(self, sort_by):
        if sort_by not in SORT_KEYS:
            raise ValueError(f'Unsupported sort key: {sort_by}')
        if sort_by != self.sort_by:
            self.sort_by = sort_by
            if self.authenticated:
                self.fetch()

    def set_sort_order(self, order):
        if order not in ('asc', 'desc'):
            raise ValueError(f'Unsupported sort order: {order}')
        if order != self.sort_order:
            self.sort_order = order
            if self.authenticated:
                self.fetch()

    def toggle_sort_order(self):
        self.set_sort_order('desc' if self.sort_order == 'asc' else 'asc')

    def delete(self, record_id):
        result = self.records_store.delete_record(self.table, record_id)
        if not result.ok:
            logger.error('Error deleting submission %s: %s', record_id, result.error_message)
            return False

        self.submissions = [sub for sub in self.submissions if sub.id != record_id]
        self.selected = None
        return True

    # --- Local view ---

    def filtered(self):
        return [sub for sub in self.submissions if sub.matches(self.search_term)]

    @property
    def total(self):
        return len(self.filtered())

    def select(self, record_id):
        self.selected = next((sub for sub in self.submissions if sub.id == record_id), None)
        return self.selected

    def export_csv(self):
        return submissions_to_csv(self.filtered())

    @staticmethod
    def export_filename(today):
        return f'contact-submissions-{today.isoformat()}.csv'

    def sign_out(self):
        """Returns an error message, or None after redirecting to the login page."""
        result = self.account_service.end_session()
        if not result.ok:
            return f'Error signing out: {result.error_message}'
        self.identity = None
        self.navigator.navigate_to(self.login_path)
        return None
