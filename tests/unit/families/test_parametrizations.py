from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import FrozenInstanceError, field, replace
from typing import Any

import pytest

from pysatl_rand.errors import ParameterClampWarning
from pysatl_rand.families import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)


@parametrization(name="bounded")
class BoundedParameters(Parametrization):
    low: float = 0.0
    high: float = 1.0
    span: float = field(init=False, repr=False, compare=False)

    @constraint(description="low is finite", field="low", fallback=0.0)
    def check_low(self) -> bool:
        return math.isfinite(self.low)

    @constraint(
        description="low < high",
        field="high",
        fallback=lambda parameters: parameters.low + 2.0,
    )
    def check_high(self) -> bool:
        return self.low < self.high

    def _derive(self) -> None:
        object.__setattr__(self, "span", self.high - self.low)


@parametrization(name="strict")
class StrictParameters(Parametrization):
    value: float = 1.0

    @constraint(description="value != 0")
    def check_nonzero(self) -> bool:
        return self.value != 0.0


@parametrization(name="centered")
class CenteredParameters(Parametrization):
    center: float = 0.5
    radius: float = 0.5

    def transform_to_base_parametrization(self) -> Parametrization:
        return BoundedParameters(low=self.center - self.radius, high=self.center + self.radius)


class TestParametrizationAPI:
    def test_constraint_is_a_simple_holder(self) -> None:
        def is_positive(obj: object) -> bool:
            return getattr(obj, "value", 0) > 0

        c = ParametrizationConstraint(description="Value must be positive", check=is_positive)
        assert c.description == "Value must be positive"
        assert c.check is is_positive
        assert c.field is None

    def test_repaired_value(self) -> None:
        fixed = ParametrizationConstraint("d", bool, field="x", fallback=3.0)
        computed = ParametrizationConstraint("d", bool, field="x", fallback=lambda p: p.high * 2)
        parameters = BoundedParameters(low=0.0, high=5.0)
        assert fixed.repaired_value(parameters) == 3.0
        assert computed.repaired_value(parameters) == 10.0

    def test_constraint_decorator_marks_function(self) -> None:
        @constraint("Value must be positive", field="value", fallback=1.0)
        def check_positive(self: Any) -> bool:
            return getattr(self, "value", 0) > 0

        assert getattr(check_positive, "__is_constraint") is True
        assert getattr(check_positive, "__constraint_description") == "Value must be positive"
        assert getattr(check_positive, "__constraint_field") == "value"
        assert getattr(check_positive, "__constraint_fallback") == 1.0

    def test_decorator_builds_frozen_dataclass(self) -> None:
        parameters = BoundedParameters(low=1.0, high=4.0)
        assert parameters.name == "bounded"
        assert hasattr(BoundedParameters, "__dataclass_fields__")
        assert parameters.parameters == {"low": 1.0, "high": 4.0}
        with pytest.raises(FrozenInstanceError):
            parameters.low = 2.0  # type: ignore[misc]

    def test_constraints_are_collected_in_order(self) -> None:
        descriptions = [c.description for c in BoundedParameters(low=0.0, high=1.0).constraints]
        assert descriptions == ["low is finite", "low < high"]

    def test_static_constraint_is_rejected(self) -> None:
        with pytest.raises(TypeError, match="instance method"):

            @parametrization(name="broken")
            class Broken(Parametrization):
                value: float = 1.0

                @staticmethod
                @constraint(description="never")
                def check(value: float) -> bool:
                    return False


class TestSanitization:
    def test_valid_values_are_kept(self, recwarn) -> None:
        parameters = BoundedParameters(low=-1.0, high=3.0)
        assert (parameters.low, parameters.high) == (-1.0, 3.0)
        assert not [w for w in recwarn if issubclass(w.category, ParameterClampWarning)]

    def test_fallback_value(self) -> None:
        with pytest.warns(ParameterClampWarning, match="low is finite"):
            parameters = BoundedParameters(low=math.nan, high=3.0)
        assert parameters.low == 0.0
        assert parameters.high == 3.0

    def test_fallback_callable_sees_repaired_fields(self) -> None:
        with pytest.warns(ParameterClampWarning) as record:
            parameters = BoundedParameters(low=math.inf, high=-5.0)
        assert len(record) == 2
        assert parameters.low == 0.0
        assert parameters.high == 2.0

    def test_warning_points_at_caller(self) -> None:
        with pytest.warns(ParameterClampWarning) as record:
            BoundedParameters(low=1.0, high=0.0)
        assert record[0].filename == __file__

    def test_constraint_without_field_raises(self) -> None:
        with pytest.raises(ValueError, match="value != 0"):
            StrictParameters(value=0.0)

    def test_derived_fields(self) -> None:
        parameters = BoundedParameters(low=1.0, high=4.0)
        assert parameters.span == 3.0
        assert "span" not in parameters.parameters

    def test_replace_recomputes_derived_fields(self) -> None:
        parameters = replace(BoundedParameters(low=1.0, high=4.0), high=10.0)
        assert parameters.span == 9.0

    def test_derived_fields_do_not_affect_equality(self) -> None:
        assert BoundedParameters(low=1.0, high=2.0) == BoundedParameters(low=1.0, high=2.0)

    def test_validate(self) -> None:
        parameters = StrictParameters(value=2.0)
        parameters.validate()
        object.__setattr__(parameters, "value", 0.0)
        with pytest.raises(ValueError):
            parameters.validate()


class TestConversion:
    def test_base_is_identity(self) -> None:
        parameters = BoundedParameters(low=0.0, high=1.0)
        assert parameters.transform_to_base_parametrization() is parameters

    def test_alternative_to_base(self) -> None:
        base = CenteredParameters(center=2.0, radius=1.0).transform_to_base_parametrization()
        assert isinstance(base, BoundedParameters)
        assert (base.low, base.high, base.span) == (1.0, 3.0, 2.0)
