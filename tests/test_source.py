"""Tests for the secure random source."""

import threading
from collections import Counter

import pytest

from rando.errors import InvalidArgument
from rando.source import (
    SecureRandom,
    random_bytes,
    secure_choice,
    secure_random_float,
    secure_random_int,
    secure_shuffle,
)
from rando.stats import chi_squared_uniformity


def _scripted(values):
    """Byte source replaying *values* one byte at a time."""
    it = iter(values)
    return lambda n: bytes(next(it) for _ in range(n))


class TestRandint:
    def test_in_range(self):
        for _ in range(500):
            assert 1 <= secure_random_int(1, 10) <= 10

    def test_min_equals_max(self):
        for _ in range(20):
            assert secure_random_int(5, 5) == 5

    def test_negative_range(self):
        for _ in range(200):
            assert -10 <= secure_random_int(-10, -5) <= -5

    def test_range_including_zero(self):
        seen = {secure_random_int(-2, 2) for _ in range(500)}
        assert seen == {-2, -1, 0, 1, 2}

    def test_huge_range(self):
        for _ in range(50):
            assert 0 <= secure_random_int(0, 2**130) <= 2**130

    def test_min_greater_than_max(self):
        with pytest.raises(InvalidArgument):
            secure_random_int(10, 1)

    def test_min_equals_max_uses_no_entropy(self):
        rng = SecureRandom()
        rng.randint(3, 3)
        assert rng.total_output == 0

    def test_rejects_out_of_range_candidates(self):
        # span 5 -> 3 bits; 7 and 6 are rejected, 3 is accepted
        rng = SecureRandom(source=_scripted([7, 6, 3]), buffer_size=1)
        assert rng.randint(0, 5) == 3
        assert rng.total_output == 3

    def test_masks_high_bits(self):
        # 0xF9 & 0b111 == 1
        rng = SecureRandom(source=_scripted([0xF9]), buffer_size=1)
        assert rng.randint(10, 15) == 11

    def test_roughly_uniform(self):
        rng = SecureRandom()
        draws = [rng.randint(1, 6) for _ in range(6000)]
        assert chi_squared_uniformity(draws, range(1, 7))["uniform"]


class TestUniform:
    def test_lowest_draw_gives_min(self):
        rng = SecureRandom(source=_scripted([0, 0, 0, 0]), buffer_size=4)
        assert rng.uniform(2.0, 3.0) == 2.0

    def test_highest_draw_stays_below_max(self):
        rng = SecureRandom(source=_scripted([0xFF] * 4), buffer_size=4)
        value = rng.uniform(0.0, 1.0)
        assert 0.999 < value < 1.0

    def test_in_range(self):
        for _ in range(200):
            assert 10.5 <= secure_random_float(10.5, 20.5) < 20.5
            assert -5.0 <= secure_random_float(-5.0, -1.0) < -1.0


class TestSequences:
    def test_shuffle_preserves_elements(self):
        original = [1, 2, 3, 4, 5]
        shuffled = secure_shuffle(original)
        assert sorted(shuffled) == original

    def test_shuffle_leaves_input_alone(self):
        original = list(range(10))
        secure_shuffle(original)
        assert original == list(range(10))

    def test_shuffle_in_place(self):
        items = list(range(20))
        SecureRandom().shuffle_in_place(items)
        assert sorted(items) == list(range(20))

    def test_shuffle_visits_all_orders(self):
        orders = Counter(tuple(secure_shuffle("abc")) for _ in range(1200))
        assert len(orders) == 6

    def test_shuffle_empty_and_single(self):
        assert secure_shuffle([]) == []
        assert secure_shuffle(["x"]) == ["x"]

    def test_choice_member(self):
        items = ["apple", "banana", "cherry"]
        for _ in range(50):
            assert secure_choice(items) in items

    def test_choice_empty(self):
        with pytest.raises(InvalidArgument):
            secure_choice([])


class TestBytes:
    def test_length(self):
        data = random_bytes(32)
        assert len(data) == 32
        assert isinstance(data, bytes)

    def test_zero(self):
        assert random_bytes(0) == b""

    def test_negative(self):
        with pytest.raises(InvalidArgument):
            random_bytes(-1)

    def test_output_varies(self):
        assert random_bytes(32) != random_bytes(32)

    def test_concurrent_draws(self):
        rng = SecureRandom()
        errors = []

        def worker():
            try:
                for _ in range(200):
                    rng.random_bytes(7)
                    assert 1 <= rng.randint(1, 6) <= 6
            except Exception as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert not errors
        assert rng.total_output >= 8 * 200 * 8
