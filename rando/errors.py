"""Error taxonomy shared by the core and its boundary layers."""

from __future__ import annotations


class RandoError(Exception):
    """Base class for every failure raised by rando.

    ``kind`` is a stable name the MCP and CLI layers put in front of the
    message so callers can tell failures apart.
    """

    kind: str = "RandoError"

    def describe(self) -> str:
        return f"{self.kind}: {self}"


class ResourceNotFound(RandoError):
    """A wordlist identifier does not resolve to readable content."""

    kind = "ResourceNotFound"

    def __init__(self, identifier: str, reason: str = "") -> None:
        self.identifier = identifier
        msg = f"wordlist {identifier!r} not found"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class WordNotFound(RandoError):
    """A dice roll has no entry in the loaded wordlist."""

    kind = "WordNotFound"

    def __init__(self, roll: str, wordlist: str, message: str | None = None) -> None:
        self.roll = roll
        self.wordlist = wordlist
        super().__init__(message or f"no word found for dice roll {roll} in wordlist {wordlist}")


class InvalidArgument(RandoError, ValueError):
    """Malformed caller input, rejected before any generation starts."""

    kind = "InvalidArgument"
