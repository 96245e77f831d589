"""Utility functions for generating club invite codes."""

import logging
import secrets
import string
from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AllocationExhausted, OracleUnavailable
from app.models.club import Club

logger = logging.getLogger(__name__)

DEFAULT_ALPHABET = string.ascii_uppercase + string.digits
DEFAULT_LENGTH = 8
DEFAULT_MAX_ATTEMPTS = 20


def generate_invite_code(length: int = DEFAULT_LENGTH, alphabet: str = DEFAULT_ALPHABET) -> str:
    """
    Generate a random invite code using uppercase letters and digits.

    Args:
        length: Length of the invite code (default: 8)
        alphabet: Characters to draw from (default: A-Z and 0-9)

    Returns:
        Random invite code string

    Example:
        >>> code = generate_invite_code()
        >>> len(code)
        8
        >>> code = generate_invite_code(12)
        >>> len(code)
        12
    """
    return ''.join(secrets.choice(alphabet) for _ in range(length))


def normalize_invite_code(code: str) -> str:
    """Normalize a user-supplied invite code for lookup."""
    return code.strip().upper()


def database_code_oracle(db: Session) -> Callable[[str], bool]:
    """
    Build a uniqueness oracle backed by the clubs table.

    Args:
        db: Database session

    Returns:
        Callable answering whether a code is already assigned to a club
    """
    def is_code_in_use(code: str) -> bool:
        try:
            existing = db.execute(
                select(Club.id).where(Club.invite_code == code).limit(1)
            ).first()
        except SQLAlchemyError as exc:
            raise OracleUnavailable("Invite code lookup failed") from exc
        return existing is not None

    return is_code_in_use


class InviteCodeAllocator:
    """
    Hands out invite codes not currently assigned to any club.

    Uniqueness is only guaranteed at check time. The unique index on
    ``clubs.invite_code`` is the final arbiter, so callers must be ready
    to retry when the insert is rejected.
    """

    def __init__(
        self,
        is_code_in_use: Callable[[str], bool],
        length: int = DEFAULT_LENGTH,
        alphabet: str = DEFAULT_ALPHABET,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        candidate_source: Optional[Callable[[], str]] = None,
    ):
        if length < 1:
            raise ValueError("length must be positive")
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        if max_attempts < 1:
            raise ValueError("max_attempts must be positive")

        self.is_code_in_use = is_code_in_use
        self.length = length
        self.alphabet = alphabet
        self.max_attempts = max_attempts
        self._alphabet_set = frozenset(alphabet)
        self._candidate_source = candidate_source or (
            lambda: generate_invite_code(self.length, self.alphabet)
        )

    def _next_candidate(self) -> str:
        candidate = self._candidate_source()
        if len(candidate) != self.length or not set(candidate) <= self._alphabet_set:
            raise ValueError(f"Candidate {candidate!r} does not fit the configured code format")
        return candidate

    def generate(self) -> str:
        """
        Return a code that no club holds at the time of the check.

        Each attempt performs exactly one oracle query. Errors raised by the
        oracle are not retried.

        Returns:
            An unused invite code

        Raises:
            AllocationExhausted: If every one of ``max_attempts`` candidates was taken
            OracleUnavailable: If the uniqueness check fails
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self._next_candidate()
            if not self.is_code_in_use(candidate):
                return candidate
            logger.debug("Invite code collision on attempt %d/%d", attempt, self.max_attempts)

        logger.critical(
            "Invite code space exhausted: %d consecutive collisions (length=%d, alphabet size=%d)",
            self.max_attempts,
            self.length,
            len(self._alphabet_set),
        )
        raise AllocationExhausted(self.max_attempts)
