"""
Tests for the KISS uniform engines.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_rand.config import configure_settings, reset_settings
from pysatl_rand.engine import (
    JKiss32Engine,
    JKiss32State,
    JLKiss64Engine,
    JLKiss64State,
    UniformEngine,
    make_engine,
)
from pysatl_rand.engine.base import expand_seed, splitmix64

ENGINE_CLASSES = [JKiss32Engine, JLKiss64Engine]


def test_splitmix64_reference_output() -> None:
    _, first = splitmix64(0)
    assert first == 0xE220A8397B1DCDAF


def test_expand_seed_is_deterministic() -> None:
    assert expand_seed(42, 6) == expand_seed(42, 6)
    assert expand_seed(42, 6) != expand_seed(43, 6)
    assert len(expand_seed(7, 4)) == 4


class TestEngines:
    @pytest.mark.parametrize("engine_cls", ENGINE_CLASSES)
    def test_protocol(self, engine_cls) -> None:
        assert isinstance(engine_cls(), UniformEngine)

    @pytest.mark.parametrize(
        "engine_cls, max_value, max_decimals",
        [
            (JKiss32Engine, 2**32 - 1, 9),
            (JLKiss64Engine, 2**64 - 1, 19),
        ],
    )
    def test_width(self, engine_cls, max_value, max_decimals) -> None:
        engine = engine_cls()
        assert engine.max_value() == max_value
        assert engine.max_decimals() == max_decimals

    @pytest.mark.parametrize("engine_cls", ENGINE_CLASSES)
    def test_variates_stay_in_range(self, engine_cls) -> None:
        engine = engine_cls(seed=2025)
        upper = engine.max_value()
        assert all(0 <= engine.variate() <= upper for _ in range(10_000))

    @pytest.mark.parametrize("engine_cls", ENGINE_CLASSES)
    def test_same_seed_same_sequence(self, engine_cls) -> None:
        first = engine_cls(seed=123)
        second = engine_cls(seed=123)
        assert [first.variate() for _ in range(100)] == [second.variate() for _ in range(100)]

    @pytest.mark.parametrize("engine_cls", ENGINE_CLASSES)
    def test_different_seeds_differ(self, engine_cls) -> None:
        first = engine_cls(seed=1)
        second = engine_cls(seed=2)
        assert [first.variate() for _ in range(10)] != [second.variate() for _ in range(10)]

    @pytest.mark.parametrize("engine_cls", ENGINE_CLASSES)
    def test_unseeded_engines_are_reproducible(self, engine_cls) -> None:
        first = engine_cls()
        second = engine_cls()
        assert [first.variate() for _ in range(10)] == [second.variate() for _ in range(10)]

    @pytest.mark.parametrize("engine_cls", ENGINE_CLASSES)
    def test_reseeding_restarts_sequence(self, engine_cls) -> None:
        engine = engine_cls(seed=99)
        head = [engine.variate() for _ in range(20)]
        engine.seed(99)
        assert [engine.variate() for _ in range(20)] == head

    @pytest.mark.parametrize("engine_cls", ENGINE_CLASSES)
    def test_state_round_trip(self, engine_cls) -> None:
        engine = engine_cls(seed=5)
        for _ in range(10):
            engine.variate()
        saved = engine.state
        tail = [engine.variate() for _ in range(10)]
        engine.state = saved
        assert [engine.variate() for _ in range(10)] == tail

    def test_state_is_a_copy(self) -> None:
        engine = JKiss32Engine(seed=5)
        original = engine.state.x
        state = engine.state
        state.x = original + 1
        assert engine.state.x == original

    def test_state_type_is_checked(self) -> None:
        with pytest.raises(TypeError):
            JKiss32Engine().state = JLKiss64State()
        with pytest.raises(TypeError):
            JLKiss64Engine().state = JKiss32State()

    @pytest.mark.parametrize("seed", [0, 1, 2**64 - 1, -17, 2**80 + 3])
    def test_seeding_avoids_forbidden_states(self, seed) -> None:
        state32 = JKiss32Engine(seed=seed).state
        assert state32.y != 0
        assert 0 < state32.c < 4294584393

        state64 = JLKiss64Engine(seed=seed).state
        assert state64.y != 0
        assert 0 < state64.c1 < 4294584393
        assert 0 < state64.c2 < 4246477509

    @pytest.mark.parametrize("engine_cls", ENGINE_CLASSES)
    def test_output_is_roughly_uniform(self, engine_cls) -> None:
        engine = engine_cls(seed=31337)
        n = 20_000
        top = engine.max_value() + 1
        mean = sum(engine.variate() / top for _ in range(n)) / n
        # Standard error of the mean of U(0, 1) is 1/sqrt(12 n) ~ 0.002.
        assert mean == pytest.approx(0.5, abs=0.01)


class TestMakeEngine:
    def test_default_variant(self) -> None:
        assert isinstance(make_engine(), JLKiss64Engine)

    def test_explicit_variant(self) -> None:
        assert isinstance(make_engine(kind="jkiss32"), JKiss32Engine)
        assert isinstance(make_engine(kind="JKISS32"), JKiss32Engine)

    def test_configured_variant(self) -> None:
        configure_settings(engine="jkiss32")
        assert isinstance(make_engine(), JKiss32Engine)

    def test_environment_variant(self, monkeypatch) -> None:
        monkeypatch.setenv("PYSATL_RAND_ENGINE", "jkiss32")
        reset_settings()
        assert isinstance(make_engine(), JKiss32Engine)

    def test_seed_is_forwarded(self) -> None:
        first = make_engine(seed=8)
        second = JLKiss64Engine(seed=8)
        assert first.variate() == second.variate()

    def test_unknown_variant(self) -> None:
        with pytest.raises(ValueError, match="Unknown engine"):
            make_engine(kind="mersenne")
