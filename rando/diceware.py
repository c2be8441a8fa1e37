"""Diceware passphrase generation.

Pipeline:
1. Read the wordlist text through a reader and parse it into a mapping
   from dice-roll keys to words
2. Look up how many dice the wordlist needs
3. Roll that many secure dice per word and look each roll up
4. Optionally capitalize, then join with single spaces

A roll with no word is fatal: rolls only ever contain the digits 1-6, so
a well-formed list of the right width covers every key.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from rando.errors import InvalidArgument, WordNotFound
from rando.source import SecureRandom, default_rng
from rando.wordlists import DEFAULT_WORDLIST, WordlistReader, get_dice_count, read_packaged_wordlist

logger = logging.getLogger(__name__)

DICE_FACES = "123456"


def parse_wordlist(text: str) -> Mapping[str, str]:
    """Parse ``<roll>\\t<word>`` lines into a read-only mapping.

    Blank lines, lines without exactly two tab-separated fields and lines
    with an empty field are skipped. Later duplicates replace earlier ones.
    A trailing ``\\r`` is stripped, so CRLF files give the same words as LF
    files instead of words ending in a carriage return.
    """
    words: dict[str, str] = {}
    for line in text.strip().split("\n"):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        parts = line.split("\t")
        if len(parts) != 2:
            continue
        key, word = parts
        if not key or not word:
            continue
        words[key] = word
    return MappingProxyType(words)


def load_wordlist(identifier: str, reader: WordlistReader = read_packaged_wordlist) -> Mapping[str, str]:
    """Read and parse *identifier*. Never cached."""
    return parse_wordlist(reader(identifier))


def generate_dice_rolls(n: int, rng: SecureRandom | None = None) -> str:
    """Return *n* secure six-sided dice as a digit string."""
    if n < 0:
        raise InvalidArgument(f"number of dice must be non-negative, got {n}")
    rng = rng or default_rng()
    return "".join(str(rng.randint(1, 6)) for _ in range(n))


def capitalize_word(word: str) -> str:
    return word[:1].upper() + word[1:]


@dataclass
class Passphrase:
    """A generated passphrase and the rolls that selected its words."""

    words: list[str]
    rolls: list[str]
    wordlist: str
    wordlist_size: int = 0

    @property
    def passphrase(self) -> str:
        return " ".join(self.words)

    @property
    def entropy_bits(self) -> float:
        if not self.words or self.wordlist_size < 2:
            return 0.0
        return len(self.words) * math.log2(self.wordlist_size)

    def __str__(self) -> str:
        return self.passphrase


def generate_passphrase(
    word_count: int = 5,
    wordlist: str = DEFAULT_WORDLIST,
    capitalize: bool = False,
    reader: WordlistReader = read_packaged_wordlist,
    rng: SecureRandom | None = None,
) -> Passphrase:
    """Generate a diceware passphrase of *word_count* words.

    Raises
    ------
    InvalidArgument
        *word_count* is negative.
    ResourceNotFound
        *wordlist* cannot be read.
    WordNotFound
        A roll is missing from the wordlist.
    """
    if word_count < 0:
        raise InvalidArgument(f"word count must be non-negative, got {word_count}")

    words_by_roll = load_wordlist(wordlist, reader)
    dice = get_dice_count(wordlist)

    words: list[str] = []
    rolls: list[str] = []
    for _ in range(word_count):
        roll = generate_dice_rolls(dice, rng)
        rolls.append(roll)
        word = words_by_roll.get(roll)
        if word is None:
            logger.error("Wordlist %s has no entry for a %d-dice roll", wordlist, dice)
            raise WordNotFound(roll, wordlist)
        words.append(capitalize_word(word) if capitalize else word)

    logger.info("Generated %d-word passphrase from %s", word_count, wordlist)
    return Passphrase(words=words, rolls=rolls, wordlist=wordlist, wordlist_size=len(words_by_roll))


def expand_prefixes(
    tokens: Iterable[str],
    words_by_roll: Mapping[str, str],
    wordlist: str = DEFAULT_WORDLIST,
    prefix_length: int = 3,
) -> list[str]:
    """Expand abbreviated or mistyped words back to full wordlist words.

    Only works for lists whose words are unique in their first
    *prefix_length* characters. Matching is case-insensitive and only
    the prefix of each token counts, so ``"bacxx"`` still gives ``"bacar"``.
    """
    by_prefix: dict[str, str] = {}
    for word in words_by_roll.values():
        prefix = word[:prefix_length].lower()
        if prefix in by_prefix and by_prefix[prefix] != word:
            raise InvalidArgument(
                f"wordlist {wordlist} is not unique in its first {prefix_length} characters"
            )
        by_prefix[prefix] = word

    out = []
    for token in tokens:
        token = token.strip()
        if len(token) < prefix_length:
            raise InvalidArgument(f"{token!r} is shorter than {prefix_length} characters")
        word = by_prefix.get(token[:prefix_length].lower())
        if word is None:
            raise WordNotFound(token, wordlist, f"no word in {wordlist} starts like {token!r}")
        out.append(word)
    return out
