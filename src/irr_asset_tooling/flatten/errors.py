"""Errors raised while parsing member lists and expanding AS-SETs with bgpq4."""

from __future__ import annotations


class FlattenError(Exception):
    """Base class for member resolution errors."""


class ExpansionFailure(FlattenError):
    """bgpq4 exited non-zero, timed out, or could not be started."""

    def __init__(self, member: str, detail: str) -> None:
        self.member = member
        self.detail = detail
        super().__init__(f"bgpq4 failed for {member}: {detail}")


class MalformedOutput(ExpansionFailure):
    """bgpq4 output was not a JSON object."""


class EmptyExpansionError(FlattenError):
    """Expansion succeeded with zero members and on_empty is 'error'."""

    def __init__(self, member: str) -> None:
        self.member = member
        super().__init__(f"bgpq4 returned empty expansion for {member}")


class InvalidSpecification(FlattenError, ValueError):
    """Member list or AS-SET definition rejected at the format boundary."""
