"""
Application-layer exceptions.

These exceptions are raised by services that look records up or write them,
and are translated into HTTP errors by the routers. The pure analytics
functions in backend.core never raise them.
"""


class TemplateNotFoundError(Exception):
    """The requested template does not exist for this user."""

    def __init__(self, template_id: str):
        super().__init__(f"Template '{template_id}' not found")
        self.template_id = template_id


class SessionAlreadyActiveError(Exception):
    """A new session was requested while another one is still active.

    Sessions transition to completed or cancelled exactly once; a user has
    at most one active session at a time.
    """

    def __init__(self, session_id: str):
        super().__init__(f"Session '{session_id}' is still active")
        self.session_id = session_id


class SessionCreationError(Exception):
    """Error while persisting a newly started session.

    Raised when the store rejects the insert or returns no row.
    """

    pass
