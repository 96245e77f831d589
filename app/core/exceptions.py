"""Domain exceptions for Clubhouse.

Routers translate these into HTTP responses; nothing below the router
layer raises ``HTTPException``.
"""


class ClubhouseError(Exception):
    """Base exception for all Clubhouse errors."""

    pass


class InviteCodeError(ClubhouseError):
    """Base exception for invite code allocation failures."""

    pass


class OracleUnavailable(InviteCodeError):
    """Raised when the invite code uniqueness check cannot be performed."""

    pass


class AllocationExhausted(InviteCodeError):
    """Raised when no free invite code was found within the attempt cap."""

    def __init__(self, attempts: int):
        """Initialize the exception.

        Args:
            attempts: Number of candidates that were checked and found in use.
        """
        self.attempts = attempts
        super().__init__(f"No free invite code found after {attempts} attempts")


class InviteCodeConflict(InviteCodeError):
    """Raised when every club insert lost its invite code to a concurrent request."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Invite code claimed concurrently on all {attempts} insert attempts")
