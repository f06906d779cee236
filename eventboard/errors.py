"""
Error kinds
===========

Every failure the board can report is a user-recoverable condition. Handlers
raise these internally and `EventBoard` turns them into `ActionResult`
values, so nothing here is ever fatal to the process.
"""

from __future__ import annotations
from typing import Sequence


class EventBoardError(Exception):
    """Base class. `reason` is the stable, human-readable message."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class AuthenticationFailed(EventBoardError):
    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class DuplicateEmail(EventBoardError):
    def __init__(self, email: str) -> None:
        super().__init__("Email already in use.")
        self.email = email


class ValidationFailed(EventBoardError):
    """Missing or malformed input. `fields` names the offending fields."""

    def __init__(self, reason: str, fields: Sequence[str] = ()) -> None:
        super().__init__(reason)
        self.fields = list(fields)

    @classmethod
    def missing(cls, fields: Sequence[str]) -> "ValidationFailed":
        return cls(f"Please fill in all required fields: {', '.join(fields)}", fields)


class NotFound(EventBoardError):
    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind.capitalize()} not found: {key}")
        self.kind = kind
        self.key = key
