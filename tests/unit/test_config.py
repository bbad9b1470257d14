from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import FrozenInstanceError

import pytest

from pysatl_rand.config import (
    ENGINE_ENV_VARIABLE,
    NumericalSettings,
    configure_settings,
    get_settings,
    reset_settings,
)


class TestSettings:
    def test_defaults(self) -> None:
        settings = get_settings()

        assert settings == NumericalSettings()
        assert settings.engine == "jlkiss64"
        assert settings.rejection_cap == 10_000_000
        assert settings.root_tolerance == 1e-10
        assert settings.tail_max_steps == 1000

    def test_settings_are_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_settings_are_frozen(self) -> None:
        with pytest.raises(FrozenInstanceError):
            get_settings().rejection_cap = 1  # type: ignore[misc]

    def test_configure_overrides(self) -> None:
        settings = configure_settings(rejection_cap=5, tail_tolerance=1e-6)

        assert settings is get_settings()
        assert settings.rejection_cap == 5
        assert settings.tail_tolerance == 1e-6
        assert settings.root_max_iter == NumericalSettings().root_max_iter

    def test_overrides_accumulate(self) -> None:
        configure_settings(rejection_cap=5)
        configure_settings(root_max_iter=7)
        assert (get_settings().rejection_cap, get_settings().root_max_iter) == (5, 7)

    def test_unknown_setting(self) -> None:
        with pytest.raises(ValueError, match="Unknown settings: bogus"):
            configure_settings(bogus=1)
        assert get_settings() == NumericalSettings()

    def test_reset(self) -> None:
        configure_settings(engine="jkiss32")
        reset_settings()
        assert get_settings().engine == "jlkiss64"

    def test_environment_selects_engine(self, monkeypatch) -> None:
        monkeypatch.setenv(ENGINE_ENV_VARIABLE, " JKISS32 ")
        reset_settings()
        assert get_settings().engine == "jkiss32"

    def test_override_wins_over_environment(self, monkeypatch) -> None:
        monkeypatch.setenv(ENGINE_ENV_VARIABLE, "jkiss32")
        assert configure_settings(engine="jlkiss64").engine == "jlkiss64"
