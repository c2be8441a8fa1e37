"""CLI for rando."""

from __future__ import annotations

import functools

import click

from rando import __version__
from rando.errors import RandoError
from rando.wordlists import DEFAULT_WORDLIST, WORDLISTS, wordlist_reader

WORDLIST_CHOICE = click.Choice(list(WORDLISTS))


def _reports_errors(f):
    """Turn rando errors into click errors (exit status 1, message on stderr)."""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except RandoError as e:
            raise click.ClickException(e.describe()) from e

    return wrapper


@click.group()
@click.version_option(__version__)
@click.option("--log-level", default="warning", envvar="RANDO_LOG_LEVEL", show_default=True,
              type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
              help="Logging level (logs go to stderr).")
@click.option("--wordlist-dir", default=None, envvar="RANDO_WORDLIST_DIR",
              type=click.Path(exists=True, file_okay=False),
              help="Directory holding the EFF and Reinhold wordlist files.")
@click.pass_context
def main(ctx: click.Context, log_level: str, wordlist_dir: str | None) -> None:
    """🎲 rando: cryptographically secure randomness and diceware passphrases."""
    from rando.log import setup_logging

    setup_logging(log_level)
    ctx.obj = wordlist_reader(wordlist_dir)


# ────────────────────────────────────────────────────────────
# Diceware
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--words", "-w", default=5, show_default=True, type=click.IntRange(min=1),
              help="Number of words.")
@click.option("--wordlist", "-l", default=DEFAULT_WORDLIST, show_default=True, type=WORDLIST_CHOICE,
              help="Wordlist to draw from.")
@click.option("--capitalize", is_flag=True, help="Capitalize the first letter of each word.")
@click.option("--show-rolls", is_flag=True, help="Also print the dice rolls and entropy.")
@click.pass_obj
@_reports_errors
def passphrase(reader, words: int, wordlist: str, capitalize: bool, show_rolls: bool) -> None:
    """Generate a diceware passphrase.

    Examples:

        rando --wordlist-dir ~/wordlists passphrase --words 7 --wordlist large_wordlist.txt

        rando passphrase --wordlist syllable_wordlist.txt --capitalize
    """
    from rando.diceware import generate_passphrase

    result = generate_passphrase(words, wordlist, capitalize, reader=reader)
    click.echo(result.passphrase)
    if show_rolls:
        click.echo(f"Dice rolls used: {', '.join(result.rolls)}", err=True)
        click.echo(f"Entropy: {result.entropy_bits:.1f} bits ({words} words from {wordlist})", err=True)


@main.command()
@click.option("--dice", "-d", default=5, show_default=True, type=click.IntRange(min=0),
              help="Dice per roll.")
@_reports_errors
def roll(dice: int) -> None:
    """Roll six-sided dice and print them as one digit string."""
    from rando.diceware import generate_dice_rolls

    click.echo(generate_dice_rolls(dice))


@main.command()
@click.argument("tokens", nargs=-1, required=True)
@click.option("--wordlist", "-l", default=DEFAULT_WORDLIST, show_default=True, type=WORDLIST_CHOICE,
              help="Wordlist the passphrase came from.")
@click.pass_obj
@_reports_errors
def expand(reader, tokens: tuple[str, ...], wordlist: str) -> None:
    """Expand abbreviated or mistyped words to full wordlist words.

    Works for wordlists whose words are unique in their first three letters.

        rando expand bac sywi
    """
    from rando.diceware import expand_prefixes, load_wordlist

    click.echo(" ".join(expand_prefixes(tokens, load_wordlist(wordlist, reader), wordlist)))


@main.command()
def wordlists() -> None:
    """List the available wordlists."""
    from rando.stats import passphrase_entropy_bits

    click.echo(f"{'Wordlist':<36} {'Dice':>4} {'Words':>6} {'Bits/word':>10}  {'Source':<8} Title")
    click.echo("-" * 100)
    for info in WORDLISTS.values():
        default = " *" if info.name == DEFAULT_WORDLIST else ""
        source = "bundled" if info.bundled else "external"
        click.echo(
            f"{info.name:<36} {info.dice:>4} {info.words:>6} "
            f"{passphrase_entropy_bits(1, info.words):>10.2f}  {source:<8} {info.title}{default}"
        )
    click.echo("\n* default")
    click.echo("External lists are read from --wordlist-dir (or RANDO_WORDLIST_DIR).")


# ────────────────────────────────────────────────────────────
# Plain randomness
# ────────────────────────────────────────────────────────────


@main.command(name="int")
@click.argument("min_value", type=int)
@click.argument("max_value", type=int)
@click.option("--count", "-n", default=1, show_default=True, help="How many integers.")
@_reports_errors
def int_(min_value: int, max_value: int, count: int) -> None:
    """Print secure random integers in [MIN_VALUE, MAX_VALUE]."""
    from rando.tools import random_number

    for n in random_number(min_value, max_value, count)["numbers"]:
        click.echo(n)


@main.command(name="bytes")
@click.option("--size", "-s", default=16, show_default=True, help="Number of bytes.")
@click.option("--encoding", "-e", default="hex", show_default=True,
              type=click.Choice(["hex", "base64", "base64url"]), help="Output encoding.")
@_reports_errors
def bytes_(size: int, encoding: str) -> None:
    """Print secure random bytes."""
    from rando.tools import random_bytes

    click.echo(random_bytes(size, encoding)["values"][0])


# ────────────────────────────────────────────────────────────
# Check: dice uniformity audit
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--samples", default=2000, show_default=True, type=click.IntRange(min=1),
              help="Number of rolls to generate.")
@click.option("--dice", default=5, show_default=True, type=click.IntRange(min=1), help="Dice per roll.")
def check(samples: int, dice: int) -> None:
    """Roll many diceware rolls and test the faces for uniformity."""
    from rando.diceware import generate_dice_rolls
    from rando.stats import roll_report

    r = roll_report([generate_dice_rolls(dice) for _ in range(samples)])
    chi = r["chi_squared"]

    click.echo(f"Rolled {r['rolls']:,} x {dice} dice ({r['dice']:,} faces)\n")
    click.echo(f"{'Face':>4} {'Count':>10} {'Share':>8}")
    click.echo("-" * 24)
    for face, count in r["counts"].items():
        click.echo(f"{face:>4} {count:>10,} {count / r['dice']:>8.4f}")
    click.echo()
    click.echo(f"  Shannon entropy: {r['shannon_entropy']:.4f} / {r['max_entropy']:.4f} bits")
    click.echo(f"  Chi-squared:     {chi['chi2']:.3f} (critical {chi['critical']:.3f}, {chi['dof']} dof)")
    click.echo(f"  p-value:         {chi['p_value']:.4f}")
    click.echo(f"  Verdict:         {'uniform' if chi['uniform'] else 'NOT uniform'}")


# ────────────────────────────────────────────────────────────
# Server: MCP over stdio or HTTP
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--transport", default="stdio", show_default=True,
              type=click.Choice(["stdio", "http", "sse"]), help="MCP transport.")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address (http/sse).")
@click.option("--port", default=8042, show_default=True, help="Port to listen on (http/sse).")
@click.pass_obj
def serve(reader, transport: str, host: str, port: int) -> None:
    """Run the MCP server.

    Tools: random-number, random-decimal, random-choice, shuffle-list,
    random-string, roll-dice, generate-uuid, random-bytes, diceware-passphrase.
    """
    from rando.server import SERVER_NAME, run

    # stdout is the protocol channel on stdio
    click.echo(f"🎲 {SERVER_NAME} v{__version__} ({transport})", err=True)
    if transport != "stdio":
        click.echo(f"   Listening on http://{host}:{port}", err=True)
    run(reader, transport=transport, host=host, port=port)
