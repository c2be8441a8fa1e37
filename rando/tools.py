"""Randomness tools served over MCP.

Each tool validates its arguments, raising :class:`InvalidArgument`
before drawing any randomness, and returns a JSON-serialisable dict.
"""

from __future__ import annotations

import base64
import uuid
from datetime import datetime, timezone
from typing import Sequence

from rando.diceware import generate_passphrase
from rando.errors import InvalidArgument
from rando.source import SecureRandom, default_rng
from rando.wordlists import DEFAULT_WORDLIST, WordlistReader, read_packaged_wordlist, validate_wordlist

CHARSETS: dict[str, str] = {
    "alphanumeric": "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    "letters": "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz",
    "numbers": "0123456789",
    "lowercase": "abcdefghijklmnopqrstuvwxyz",
    "uppercase": "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "symbols": "!@#$%^&*()_+-=[]{}|;:,.<>?",
}

UUID_FORMATS = ("standard", "no-hyphens", "uppercase")
BYTE_ENCODINGS = ("hex", "base64", "base64url")
DATASET_KINDS = ("numbers", "coordinates", "colors", "names")
DATASET_SIZE = 10

_FIRST_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Henry"]
_LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis"]


def _require_count(count: int, what: str = "count") -> None:
    if count < 1:
        raise InvalidArgument(f"{what} must be at least 1, got {count}")


def random_number(min: int = 0, max: int = 100, count: int = 1, rng: SecureRandom | None = None) -> dict:
    rng = rng or default_rng()
    _require_count(count)
    if min > max:
        raise InvalidArgument("minimum value cannot be greater than maximum value")
    return {"min": min, "max": max, "numbers": [rng.randint(min, max) for _ in range(count)]}


def random_decimal(
    min: float = 0.0,
    max: float = 1.0,
    precision: int = 2,
    count: int = 1,
    rng: SecureRandom | None = None,
) -> dict:
    rng = rng or default_rng()
    _require_count(count)
    if min >= max:
        raise InvalidArgument("minimum value must be less than maximum value")
    if precision < 0:
        raise InvalidArgument(f"precision must be non-negative, got {precision}")
    numbers = [round(rng.uniform(min, max), precision) for _ in range(count)]
    return {"min": min, "max": max, "precision": precision, "numbers": numbers}


def random_choice(
    items: Sequence[str],
    count: int = 1,
    allow_duplicates: bool = True,
    rng: SecureRandom | None = None,
) -> dict:
    rng = rng or default_rng()
    _require_count(count)
    if not items:
        raise InvalidArgument("cannot pick from an empty list")
    if not allow_duplicates and count > len(items):
        raise InvalidArgument(f"cannot pick {count} unique items from a list of {len(items)} items")

    available = list(items)
    choices = []
    for _ in range(count):
        if allow_duplicates:
            choices.append(rng.choice(available))
        else:
            choices.append(available.pop(rng.randint(0, len(available) - 1)))
    return {"choices": choices, "total_options": len(items)}


def shuffle_list(items: Sequence[str], rng: SecureRandom | None = None) -> dict:
    rng = rng or default_rng()
    return {"shuffled": rng.shuffle(items)}


def random_string(
    length: int = 8,
    charset: str = "alphanumeric",
    count: int = 1,
    rng: SecureRandom | None = None,
) -> dict:
    rng = rng or default_rng()
    _require_count(count)
    if length < 1:
        raise InvalidArgument(f"length must be at least 1, got {length}")
    chars = CHARSETS.get(charset)
    if chars is None:
        raise InvalidArgument(f"unknown charset {charset!r}; choose from {', '.join(CHARSETS)}")
    strings = ["".join(rng.choice(chars) for _ in range(length)) for _ in range(count)]
    return {"charset": charset, "length": length, "strings": strings}


def roll_dice(sides: int = 6, count: int = 1, modifier: int = 0, rng: SecureRandom | None = None) -> dict:
    rng = rng or default_rng()
    if sides < 2:
        raise InvalidArgument("dice must have at least 2 sides")
    _require_count(count, "number of dice")
    rolls = [rng.randint(1, sides) for _ in range(count)]
    total = sum(rolls)
    notation = f"{count}d{sides}"
    if modifier:
        notation += f"{modifier:+d}"
    return {
        "notation": notation,
        "rolls": rolls,
        "total": total,
        "modifier": modifier,
        "modified_total": total + modifier,
    }


def generate_uuid(count: int = 1, format: str = "standard") -> dict:
    _require_count(count)
    if format not in UUID_FORMATS:
        raise InvalidArgument(f"unknown UUID format {format!r}; choose from {', '.join(UUID_FORMATS)}")
    uuids = []
    for _ in range(count):
        # uuid4 draws from os.urandom
        value = str(uuid.uuid4())
        if format == "no-hyphens":
            value = value.replace("-", "")
        elif format == "uppercase":
            value = value.upper()
        uuids.append(value)
    return {"format": format, "uuids": uuids}


def _encode(data: bytes, encoding: str) -> str:
    if encoding == "hex":
        return data.hex()
    if encoding == "base64":
        return base64.b64encode(data).decode("ascii")
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def random_bytes(size: int = 16, encoding: str = "hex", count: int = 1, rng: SecureRandom | None = None) -> dict:
    rng = rng or default_rng()
    _require_count(count)
    if size < 1:
        raise InvalidArgument("size must be at least 1 byte")
    if encoding not in BYTE_ENCODINGS:
        raise InvalidArgument(f"unknown encoding {encoding!r}; choose from {', '.join(BYTE_ENCODINGS)}")
    values = [_encode(rng.random_bytes(size), encoding) for _ in range(count)]
    return {"size": size, "encoding": encoding, "values": values}


def random_dataset(kind: str, rng: SecureRandom | None = None) -> dict:
    """Ten secure random records of the requested *kind*."""
    rng = rng or default_rng()
    if kind == "numbers":
        data = [rng.randint(0, 999) for _ in range(DATASET_SIZE)]
    elif kind == "coordinates":
        data = [
            {"latitude": rng.uniform(-90, 90), "longitude": rng.uniform(-180, 180)}
            for _ in range(DATASET_SIZE)
        ]
    elif kind == "colors":
        data = []
        for _ in range(DATASET_SIZE):
            r, g, b = rng.random_bytes(3)
            data.append({"hex": f"#{r:02x}{g:02x}{b:02x}", "rgb": {"r": r, "g": g, "b": b}})
    elif kind == "names":
        data = [
            {"first": rng.choice(_FIRST_NAMES), "last": rng.choice(_LAST_NAMES)}
            for _ in range(DATASET_SIZE)
        ]
    else:
        raise InvalidArgument(f"unknown dataset type {kind!r}; available types: {', '.join(DATASET_KINDS)}")
    return {
        "type": kind,
        "size": DATASET_SIZE,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "data": data,
    }


def diceware_passphrase(
    words: int = 5,
    wordlist: str = DEFAULT_WORDLIST,
    capitalize: bool = False,
    reader: WordlistReader = read_packaged_wordlist,
    rng: SecureRandom | None = None,
) -> dict:
    """Diceware passphrase plus the rolls that picked each word."""
    _require_count(words, "word count")
    validate_wordlist(wordlist)
    result = generate_passphrase(words, wordlist, capitalize, reader=reader, rng=rng)
    return {
        "passphrase": result.passphrase,
        "rolls": result.rolls,
        "words": len(result.words),
        "wordlist": wordlist,
        "entropy_bits": round(result.entropy_bits, 2),
    }
