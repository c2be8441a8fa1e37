import logging
from pathlib import Path

import pytest

from rando.wordlists import DATA_DIR, wordlist_reader


@pytest.fixture(autouse=True)
def _reset_rando_logger():
    """CLI runs attach a handler to a stream that closes after the run."""
    yield
    logger = logging.getLogger("rando")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def wordlist_dir(tmp_path: Path) -> Path:
    """Directory holding a tiny malformed wordlist named like a canonical one."""
    (tmp_path / "short_wordlist.txt").write_text(
        "1111\tword1\ninvalid_line_no_tab\n2222\tword2\n\t\t\n3333\tword3\textra_column",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture(scope="session")
def installed_dir(tmp_path_factory) -> Path:
    """A user wordlist directory with a full-size file under every canonical name.

    Filled from the bundled syllable lists, so every roll has a word.
    """
    root = tmp_path_factory.mktemp("wordlists")
    short = (DATA_DIR / "syllable_wordlist.txt").read_text(encoding="utf-8")
    large = (DATA_DIR / "syllable_large_wordlist.txt").read_text(encoding="utf-8")
    for name, text in {
        "short_wordlist_unique_prefixes.txt": short,
        "short_wordlist.txt": short,
        "large_wordlist.txt": large,
        "original_reinhold_wordlist.txt": large,
    }.items():
        (root / name).write_text(text, encoding="utf-8")
    return root


@pytest.fixture(scope="session")
def installed_reader(installed_dir):
    return wordlist_reader(installed_dir)
