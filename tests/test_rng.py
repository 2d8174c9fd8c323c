"""Tests for the seeded random stream."""

import pytest

from puzzle_facts import SeededRandom, mulberry32_step


class TestMulberry32:
    """Tests for the pure step function."""

    def test_step_is_pure(self) -> None:
        """The same state always gives the same next state and value."""
        assert mulberry32_step(12345) == mulberry32_step(12345)

    @pytest.mark.parametrize("state", [0, 1, 42, 0x7FFFFFFF, 0xFFFFFFFF])
    def test_step_stays_in_range(self, state: int) -> None:
        """Next state is 32-bit and the value lies in [0, 1)."""
        next_state, value = mulberry32_step(state)
        assert 0 <= next_state <= 0xFFFFFFFF
        assert 0.0 <= value < 1.0


class TestSeededRandom:
    """Tests for the generator instance."""

    def test_same_seed_same_sequence(self) -> None:
        """Two generators with one seed agree on every value."""
        a = SeededRandom(42)
        b = SeededRandom(42)
        assert [a.random() for _ in range(100)] == [b.random() for _ in range(100)]

    def test_different_seeds_differ(self) -> None:
        """Different seeds give different sequences."""
        a = SeededRandom(1)
        b = SeededRandom(2)
        assert [a.random() for _ in range(10)] != [b.random() for _ in range(10)]

    def test_seed_is_reduced_to_32_bits(self) -> None:
        """Seeds equal modulo 2**32 give the same stream."""
        a = SeededRandom(7)
        b = SeededRandom(7 + 2**32)
        assert a.seed == b.seed
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]

    def test_instances_do_not_share_state(self) -> None:
        """Advancing one generator leaves another untouched."""
        a = SeededRandom(99)
        b = SeededRandom(99)
        for _ in range(50):
            a.random()
        fresh = SeededRandom(99)
        assert b.random() == fresh.random()

    def test_uniform_bounds(self) -> None:
        """uniform() stays inside the requested range."""
        rng = SeededRandom(5)
        values = [rng.uniform(20.0, 44.0) for _ in range(500)]
        assert all(20.0 <= v < 44.0 for v in values)

    def test_matches_step_function(self) -> None:
        """The instance threads its state through mulberry32_step."""
        rng = SeededRandom(2024)
        state = 2024
        for _ in range(10):
            state, expected = mulberry32_step(state)
            assert rng.random() == expected
        assert rng.state == state

    def test_known_sequence(self) -> None:
        """Seed 1 gives the published mulberry32 values."""
        rng = SeededRandom(1)
        assert [rng.random() for _ in range(3)] == [0.6270739405881613, 0.002735721180215478, 0.5274470399599522]
