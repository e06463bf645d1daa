"""
Exceptions raised by services and translated to HTTP responses by core.api.
"""


class AccessDenied(Exception):
    """Raised when a resource does not exist or is not owned by the caller.

    Both cases produce the same response so the existence of other users'
    data is never revealed.
    """

    def __init__(self, message="Not found or access denied"):
        super().__init__(message)
        self.message = message


class NotConfigured(Exception):
    """Raised when a price or setting required for a calculation is missing."""

    def __init__(self, message="Price not configured"):
        super().__init__(message)
        self.message = message
