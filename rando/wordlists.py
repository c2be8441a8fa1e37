"""Wordlist registry and wordlist content resolution.

The registry is a compiled-in table; the text itself comes from a
*reader*, a callable mapping an identifier to raw UTF-8 text.

The four canonical diceware lists (the EFF short, short unique-prefix and
large lists, and Reinhold's original list) are not shipped. They are read
from a directory the user supplies (``--wordlist-dir`` or
``RANDO_WORDLIST_DIR``). The package bundles only generated syllable
lists, registered under their own names.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from rando.errors import InvalidArgument, ResourceNotFound

logger = logging.getLogger(__name__)

WordlistReader = Callable[[str], str]

DATA_DIR = Path(__file__).parent / "data"


@dataclass(frozen=True)
class WordlistInfo:
    """Static metadata for a registered wordlist."""

    name: str
    title: str
    dice: int
    words: int
    bundled: bool = False


DEFAULT_WORDLIST = "short_wordlist_unique_prefixes.txt"
DEFAULT_DICE = 4

WORDLISTS: dict[str, WordlistInfo] = {
    info.name: info
    for info in (
        WordlistInfo("short_wordlist_unique_prefixes.txt", "EFF Short Wordlist (unique prefixes)", 4, 1296),
        WordlistInfo("short_wordlist.txt", "EFF Short Wordlist", 4, 1296),
        WordlistInfo("large_wordlist.txt", "EFF Large Wordlist", 5, 7776),
        WordlistInfo("original_reinhold_wordlist.txt", "Original Reinhold Wordlist", 5, 7776),
        WordlistInfo("syllable_wordlist.txt", "Generated syllables, unique prefixes", 4, 1296, bundled=True),
        WordlistInfo("syllable_large_wordlist.txt", "Generated syllables", 5, 7776, bundled=True),
    )
}

BUNDLED_WORDLISTS = tuple(name for name, info in WORDLISTS.items() if info.bundled)


def get_dice_count(identifier: str | None) -> int:
    """Dice per roll for *identifier*; 4 for anything unregistered."""
    if not identifier:
        return DEFAULT_DICE
    info = WORDLISTS.get(identifier)
    return info.dice if info else DEFAULT_DICE


def validate_wordlist(identifier: str) -> str:
    """Reject identifiers outside the registry."""
    if identifier not in WORDLISTS:
        raise InvalidArgument(
            f"invalid wordlist {identifier!r}; available wordlists: {', '.join(WORDLISTS)}"
        )
    return identifier


def _resolve(directory: Path, identifier: str) -> Path:
    if not identifier or "/" in identifier or "\\" in identifier or identifier in (".", ".."):
        raise ResourceNotFound(identifier, "not a plain file name")
    return directory / identifier


def _read(path: Path, identifier: str) -> str:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ResourceNotFound(identifier) from None
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceNotFound(identifier, str(e)) from e
    logger.debug("Read wordlist %s (%d bytes)", identifier, len(text))
    return text


def directory_reader(directory: str | Path) -> WordlistReader:
    """Build a reader serving wordlist files from *directory*."""
    root = Path(directory)

    def reader(identifier: str) -> str:
        return _read(_resolve(root, identifier), identifier)

    return reader


def read_packaged_wordlist(identifier: str) -> str:
    """Read one of the wordlists bundled with the package."""
    info = WORDLISTS.get(identifier)
    if info and not info.bundled:
        raise ResourceNotFound(
            identifier, "not bundled; set RANDO_WORDLIST_DIR to a directory holding it"
        )
    return _read(_resolve(DATA_DIR, identifier), identifier)


def wordlist_reader(directory: str | Path | None = None) -> WordlistReader:
    """Reader for *directory* that still serves the bundled lists.

    Without a directory this is :func:`read_packaged_wordlist`.
    """
    if directory is None:
        return read_packaged_wordlist
    local = directory_reader(directory)

    def reader(identifier: str) -> str:
        try:
            return local(identifier)
        except ResourceNotFound:
            if identifier not in BUNDLED_WORDLISTS:
                raise
        return read_packaged_wordlist(identifier)

    return reader
