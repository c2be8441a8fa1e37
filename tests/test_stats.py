"""Tests for the statistical checks."""

import math

import numpy as np
import pytest

from rando.stats import (
    chi_squared_critical,
    chi_squared_uniformity,
    passphrase_entropy_bits,
    roll_report,
    shannon_entropy,
)


class TestShannon:
    def test_uniform(self):
        data = list(np.tile(np.arange(6), 100))
        assert abs(shannon_entropy(data) - math.log2(6)) < 1e-9

    def test_constant(self):
        assert shannon_entropy(["3"] * 100) == 0.0

    def test_empty(self):
        assert shannon_entropy([]) == 0.0


class TestChiSquared:
    @pytest.mark.parametrize("dof, expected", [(1, 10.828), (5, 20.515), (9, 27.877)])
    def test_critical_value(self, dof, expected):
        # tabulated upper-tail values at p = 0.001
        assert chi_squared_critical(dof) == pytest.approx(expected, abs=1e-3)

    def test_critical_value_alpha(self):
        assert chi_squared_critical(5, alpha=0.05) == pytest.approx(11.070, abs=1e-3)

    def test_p_value(self):
        data = ["1"] * 20 + ["2"] * 10
        r = chi_squared_uniformity(data, "12")
        # chi2 = 3.333 on 1 dof
        assert r["p_value"] == pytest.approx(0.0679, abs=1e-3)
        assert r["uniform"]

    def test_perfectly_uniform(self):
        r = chi_squared_uniformity(list("123456") * 50, "123456")
        assert r["chi2"] == 0.0
        assert r["dof"] == 5
        assert r["p_value"] == 1.0
        assert r["uniform"]

    def test_biased(self):
        data = ["1"] * 500 + list("23456") * 20
        r = chi_squared_uniformity(data, "123456")
        assert r["p_value"] < 0.001
        assert r["chi2"] > r["critical"]
        assert not r["uniform"]

    def test_stray_values(self):
        data = list("123456") * 50 + ["7"]
        assert not chi_squared_uniformity(data, "123456")["uniform"]


class TestRollReport:
    def test_counts(self):
        r = roll_report(["1234", "5612"])
        assert r["rolls"] == 2
        assert r["dice"] == 8
        assert r["counts"] == {"1": 2, "2": 2, "3": 1, "4": 1, "5": 1, "6": 1}
        assert sum(r["counts"].values()) == r["dice"]

    def test_max_entropy(self):
        assert roll_report(["123456"])["max_entropy"] == round(math.log2(6), 4)


class TestEntropyBits:
    def test_values(self):
        assert passphrase_entropy_bits(5, 7776) == 5 * math.log2(7776)
        assert round(passphrase_entropy_bits(1, 1296), 2) == 10.34

    def test_degenerate(self):
        assert passphrase_entropy_bits(0, 7776) == 0.0
        assert passphrase_entropy_bits(5, 1) == 0.0
