# leadportal/navigation.py

"""
Navigation collaborator handed to the controllers.

Controllers only state *where* to go; the web layer turns the recorded
intent into a response (a redirect, or a ``Refresh`` header for a delayed
navigation).
"""


class ScheduledNavigation:
    """A navigation that should happen after ``delay`` seconds."""

    def __init__(self, delay, path):
        self.delay = delay
        self.path = path
        self.cancelled = False
        self.handed_off = False

    @property
    def pending(self):
        return not self.cancelled and not self.handed_off

    def cancel(self):
        if not self.handed_off:
            self.cancelled = True

    def hand_off(self):
        """Marks the navigation as delivered to the client."""
        if self.cancelled:
            return None
        self.handed_off = True
        return self.path


class Navigator:
    """Records navigation intents; ``target`` is the last immediate one."""

    FULL_RELOAD = 'full_reload'
    ROUTER_PUSH = 'router_push'

    def __init__(self):
        self.target = None
        self.mode = None
        self.scheduled = None

    def navigate_to(self, path):
        self.target = path
        self.mode = self.FULL_RELOAD

    def router_push(self, path):
        self.target = path
        self.mode = self.ROUTER_PUSH

    def schedule(self, delay, path):
        if self.scheduled is not None:
            self.scheduled.cancel()
        self.scheduled = ScheduledNavigation(delay, path)
        return self.scheduled

    def refresh_header(self):
        """Returns a ``Refresh`` header value for a pending delayed navigation."""
        if self.scheduled is None or not self.scheduled.pending:
            return None
        delay = self.scheduled.delay
        path = self.scheduled.hand_off()
        return f'{delay:g}; url={path}'
