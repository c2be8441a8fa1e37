"""MCP server exposing the randomness tools.

Tools:

    random-number, random-decimal, random-choice, shuffle-list,
    random-string, roll-dice, generate-uuid, random-bytes,
    diceware-passphrase

Resources:

    wordlist://{filename}
    random://dataset/{kind}
"""

import json
import logging
from typing import Annotated, Callable, Literal, TypeVar

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError
from pydantic import Field

from rando import __version__, tools
from rando.errors import RandoError
from rando.wordlists import DEFAULT_WORDLIST, WORDLISTS, WordlistReader, read_packaged_wordlist, validate_wordlist

logger = logging.getLogger(__name__)

SERVER_NAME = "random-numbers-server"

R = TypeVar("R")

WordlistName = Literal[
    "short_wordlist_unique_prefixes.txt",
    "short_wordlist.txt",
    "large_wordlist.txt",
    "original_reinhold_wordlist.txt",
    "syllable_wordlist.txt",
    "syllable_large_wordlist.txt",
]


def _invoke(tool: str, fn: Callable[..., R], *args, **kwargs) -> R:
    """Run *fn*, turning rando errors into MCP tool errors."""
    try:
        return fn(*args, **kwargs)
    except RandoError as e:
        logger.warning("Tool %s failed: %s", tool, e.kind)
        raise ToolError(e.describe()) from e


def create_server(reader: WordlistReader | None = None) -> FastMCP:
    """Build a server whose wordlists come from *reader*."""
    reader = reader or read_packaged_wordlist
    mcp = FastMCP(SERVER_NAME)

    # ── tools ──

    @mcp.tool(name="random-number")
    def random_number(
        min: Annotated[int, Field(description="Minimum value (inclusive)")] = 0,
        max: Annotated[int, Field(description="Maximum value (inclusive)")] = 100,
        count: Annotated[int, Field(description="Number of random numbers to generate")] = 1,
    ) -> dict:
        """Generate cryptographically secure random integers within a range."""
        return _invoke("random-number", tools.random_number, min, max, count)

    @mcp.tool(name="random-decimal")
    def random_decimal(
        min: Annotated[float, Field(description="Minimum value (inclusive)")] = 0.0,
        max: Annotated[float, Field(description="Maximum value (exclusive)")] = 1.0,
        precision: Annotated[int, Field(description="Number of decimal places")] = 2,
        count: Annotated[int, Field(description="Number of random decimals to generate")] = 1,
    ) -> dict:
        """Generate cryptographically secure random decimals within a range."""
        return _invoke("random-decimal", tools.random_decimal, min, max, precision, count)

    @mcp.tool(name="random-choice")
    def random_choice(
        items: Annotated[list[str], Field(description="List of items to choose from")],
        count: Annotated[int, Field(description="Number of items to pick")] = 1,
        allow_duplicates: Annotated[bool, Field(description="Allow picking the same item multiple times")] = True,
    ) -> dict:
        """Pick random items from a list."""
        return _invoke("random-choice", tools.random_choice, items, count, allow_duplicates)

    @mcp.tool(name="shuffle-list")
    def shuffle_list(
        items: Annotated[list[str], Field(description="List of items to shuffle")],
    ) -> dict:
        """Shuffle a list with a secure Fisher–Yates permutation."""
        return _invoke("shuffle-list", tools.shuffle_list, items)

    @mcp.tool(name="random-string")
    def random_string(
        length: Annotated[int, Field(description="Length of the string")] = 8,
        charset: Annotated[
            Literal["alphanumeric", "letters", "numbers", "lowercase", "uppercase", "symbols"],
            Field(description="Character set to use"),
        ] = "alphanumeric",
        count: Annotated[int, Field(description="Number of random strings to generate")] = 1,
    ) -> dict:
        """Generate secure random strings from a character set."""
        return _invoke("random-string", tools.random_string, length, charset, count)

    @mcp.tool(name="roll-dice")
    def roll_dice(
        sides: Annotated[int, Field(description="Number of sides on the dice")] = 6,
        count: Annotated[int, Field(description="Number of dice to roll")] = 1,
        modifier: Annotated[int, Field(description="Modifier to add to the total")] = 0,
    ) -> dict:
        """Roll dice using cryptographically secure randomness."""
        return _invoke("roll-dice", tools.roll_dice, sides, count, modifier)

    @mcp.tool(name="generate-uuid")
    def generate_uuid(
        count: Annotated[int, Field(description="Number of UUIDs to generate")] = 1,
        format: Annotated[
            Literal["standard", "no-hyphens", "uppercase"], Field(description="UUID format")
        ] = "standard",
    ) -> dict:
        """Generate version 4 UUIDs."""
        return _invoke("generate-uuid", tools.generate_uuid, count, format)

    @mcp.tool(name="random-bytes")
    def random_bytes(
        size: Annotated[int, Field(description="Number of bytes to generate")] = 16,
        encoding: Annotated[
            Literal["hex", "base64", "base64url"], Field(description="Output encoding")
        ] = "hex",
        count: Annotated[int, Field(description="Number of byte sequences to generate")] = 1,
    ) -> dict:
        """Generate cryptographically secure random bytes."""
        return _invoke("random-bytes", tools.random_bytes, size, encoding, count)

    @mcp.tool(name="diceware-passphrase")
    def diceware_passphrase(
        words: Annotated[int, Field(description="Number of words in the passphrase")] = 5,
        wordlist: Annotated[
            WordlistName,
            Field(description="Wordlist to use; the EFF and Reinhold lists come from the wordlist directory"),
        ] = DEFAULT_WORDLIST,
        capitalize: Annotated[bool, Field(description="Capitalize first letter of each word")] = False,
    ) -> dict:
        """Generate a cryptographically secure diceware passphrase."""
        return _invoke(
            "diceware-passphrase", tools.diceware_passphrase, words, wordlist, capitalize, reader=reader
        )

    # ── resources ──

    @mcp.resource("wordlist://{filename}", mime_type="text/plain")
    def wordlist(filename: str) -> str:
        """Raw text of a diceware wordlist."""
        try:
            return reader(validate_wordlist(filename))
        except RandoError as e:
            raise ResourceError(e.describe()) from e

    @mcp.resource("random://dataset/{kind}", mime_type="application/json")
    def dataset(kind: str) -> str:
        """Ten secure random records: numbers, coordinates, colors or names."""
        try:
            return json.dumps(tools.random_dataset(kind), indent=2)
        except RandoError as e:
            raise ResourceError(e.describe()) from e

    logger.debug("Created %s with %d wordlists", SERVER_NAME, len(WORDLISTS))
    return mcp


def run(reader: WordlistReader | None = None, transport: str = "stdio", host: str = "127.0.0.1", port: int = 8042) -> None:
    """Run the MCP server until interrupted."""
    mcp = create_server(reader)
    logger.info("Starting %s v%s over %s", SERVER_NAME, __version__, transport)
    try:
        if transport == "stdio":
            mcp.run(transport="stdio")
        else:
            mcp.run(transport=transport, host=host, port=port)
    except KeyboardInterrupt:
        pass
    finally:
        logger.info("Shutting down %s", SERVER_NAME)
