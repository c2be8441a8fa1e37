"""
rando: cryptographically secure randomness and diceware passphrases.

Serves secure integers, floats, strings, bytes, UUIDs and diceware
passphrases as MCP tools, all drawn from the operating system CSPRNG.
"""

__version__ = "1.0.0"

from rando.diceware import Passphrase, generate_dice_rolls, generate_passphrase, load_wordlist, parse_wordlist
from rando.errors import InvalidArgument, RandoError, ResourceNotFound, WordNotFound
from rando.source import SecureRandom, secure_choice, secure_random_float, secure_random_int, secure_shuffle
from rando.wordlists import DEFAULT_WORDLIST, WORDLISTS, get_dice_count

__all__ = [
    "DEFAULT_WORDLIST",
    "InvalidArgument",
    "Passphrase",
    "RandoError",
    "ResourceNotFound",
    "SecureRandom",
    "WORDLISTS",
    "WordNotFound",
    "generate_dice_rolls",
    "generate_passphrase",
    "get_dice_count",
    "load_wordlist",
    "parse_wordlist",
    "secure_choice",
    "secure_random_float",
    "secure_random_int",
    "secure_shuffle",
    "__version__",
]
