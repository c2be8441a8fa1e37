"""Statistical checks for secure random output."""

from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

import numpy as np
from scipy import stats as sp_stats

from rando.diceware import DICE_FACES

ALPHA = 0.001


def shannon_entropy(values: Sequence) -> float:
    """Shannon entropy in bits per symbol."""
    if len(values) == 0:
        return 0.0
    counts = np.array(list(Counter(values).values()), dtype=float)
    probs = counts / counts.sum()
    return float(-np.sum(probs * np.log2(probs)))


def chi_squared_critical(dof: int, alpha: float = ALPHA) -> float:
    """Chi-squared value exceeded with probability *alpha*."""
    return float(sp_stats.chi2.ppf(1.0 - alpha, dof))


def chi_squared_uniformity(values: Sequence, categories: Sequence) -> dict:
    """Chi-squared goodness of fit against a uniform distribution.

    Values outside *categories* count against uniformity.
    """
    categories = list(categories)
    counts = Counter(values)
    observed = np.array([counts.get(c, 0) for c in categories], dtype=float)
    stray = len(values) - int(observed.sum())
    dof = max(len(categories) - 1, 1)
    expected = len(values) / len(categories) if categories else 0.0
    chi2 = float(np.sum((observed - expected) ** 2 / max(expected, 1e-15)))
    p = float(sp_stats.chi2.sf(chi2, dof))
    return {
        "chi2": round(chi2, 4),
        "dof": dof,
        "critical": round(chi_squared_critical(dof), 4),
        "p_value": p,
        "uniform": stray == 0 and p >= ALPHA,
    }


def passphrase_entropy_bits(word_count: int, wordlist_size: int) -> float:
    """Entropy of a passphrase drawn uniformly from *wordlist_size* words."""
    if word_count <= 0 or wordlist_size < 2:
        return 0.0
    return word_count * math.log2(wordlist_size)


def roll_report(rolls: Sequence[str]) -> dict:
    """Per-face counts and uniformity results over a list of dice rolls."""
    faces = [c for roll in rolls for c in roll]
    counts = Counter(faces)
    return {
        "rolls": len(rolls),
        "dice": len(faces),
        "counts": {face: counts.get(face, 0) for face in DICE_FACES},
        "shannon_entropy": round(shannon_entropy(faces), 4),
        "max_entropy": round(math.log2(len(DICE_FACES)), 4),
        "chi_squared": chi_squared_uniformity(faces, DICE_FACES),
    }
