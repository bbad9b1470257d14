"""
Binomial Variate Generation
===========================

Regime-dispatched sampling of the Binomial distribution.

Regimes
-------
- ``DEGENERATE`` — ``p`` is 0 or 1, the outcome is constant.
- ``BERNOULLI_SUM`` — few trials (or ``p`` close to ½): sum of Bernoulli
  variates.
- ``WAITING`` — small ``⌊n·min(p, q)⌋``: count geometric waiting times until
  they exceed ``n``.
- ``REJECTION`` — Devroye's four-region rejection from a normal / exponential
  envelope around ``⌊n·min(p, q)⌋`` for ``Bin(n, p_floor)``, completed by a
  waiting draw for the residual probability.

Draws are made for ``min(p, q)`` and reflected (``n - X``) when ``p > ½``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from pysatl_rand._logging import get_logger
from pysatl_rand.config import get_settings
from pysatl_rand.errors import warn_rejection_exhausted
from pysatl_rand.generators.elementary import (
    bernoulli,
    geometric,
    standard_bernoulli,
    standard_exponential,
    standard_normal,
    uniform,
)
from pysatl_rand.numerics.combinatorics import log_binomial_coef

if TYPE_CHECKING:
    from pysatl_rand.engine import UniformEngine

logger = get_logger(__name__)

_SQRT_2PI = math.sqrt(2.0 * math.pi)


class BinomialRegime(Enum):
    DEGENERATE = auto()
    BERNOULLI_SUM = auto()
    WAITING = auto()
    REJECTION = auto()


@dataclass(frozen=True, slots=True)
class ProbabilitySplit:
    """
    Decomposition of ``min(p, q)`` used by the waiting and rejection regimes.

    Attributes
    ----------
    minpq : float
        ``min(p, 1 - p)``.
    np_floor : int
        ``⌊n · minpq⌋``.
    p_floor : float
        ``np_floor / n``.
    p_res : float
        ``minpq - p_floor``, zero when ``n · minpq`` is (close to) an integer.
    """

    minpq: float
    np_floor: int
    p_floor: float
    p_res: float

    @classmethod
    def of(cls, number: int, probability: float) -> ProbabilitySplit:
        minpq = min(probability, 1.0 - probability)
        np_floor = math.floor(number * minpq)
        p_floor = np_floor / number
        p_res = 0.0 if math.isclose(np_floor, number * minpq) else minpq - p_floor
        return cls(minpq=minpq, np_floor=np_floor, p_floor=p_floor, p_res=p_res)


def select_regime(number: int, probability: float, split: ProbabilitySplit) -> BinomialRegime:
    """Choose the sampling algorithm for ``Bin(number, probability)``."""
    if probability == 0.0 or probability == 1.0:
        return BinomialRegime.DEGENERATE
    if (
        number <= 3
        or (number <= 13 and split.minpq > 0.025 * (number + 6))
        or (number <= 200 and math.isclose(probability, 0.5))
    ):
        return BinomialRegime.BERNOULLI_SUM
    if split.np_floor <= 12 or (split.p_res > 0.0 and split.np_floor <= 16):
        return BinomialRegime.WAITING
    return BinomialRegime.REJECTION


@dataclass(frozen=True, slots=True)
class BtpeConstants:
    """Envelope constants of the rejection regime for one parameter set."""

    number: int
    np_floor: int
    nq_floor: int
    log_p_floor: float
    log_q_floor: float
    delta1: float
    delta2: float
    sigma1: float
    sigma2: float
    c: float
    coefa3: float
    coefa4: float
    a1: float
    a2: float
    a3: float
    a4: float
    log_prob_at_np_floor: float

    @classmethod
    def build(cls, number: int, split: ProbabilitySplit) -> BtpeConstants:
        np_floor = split.np_floor
        nq_floor = number - np_floor
        p_floor = split.p_floor
        q_floor = 1.0 - p_floor
        npq = np_floor * q_floor
        coef = 128.0 * number / math.pi

        delta1 = npq * math.log(coef * p_floor / (81.0 * q_floor))
        delta1 = math.sqrt(delta1) if delta1 > 1.0 else 1.0
        delta2 = npq * math.log(coef * q_floor / p_floor)
        delta2 = math.sqrt(delta2) if delta2 > 1.0 else 1.0

        npq_sqrt = math.sqrt(npq)
        sigma1 = npq_sqrt * (1.0 + 0.25 * delta1 / np_floor)
        sigma2 = npq_sqrt * (1.0 + 0.25 * delta2 / nq_floor)
        c = 2.0 * delta1 / np_floor

        a1 = 0.5 * math.exp(c) * sigma1 * _SQRT_2PI
        a2 = a1 + 0.5 * sigma2 * _SQRT_2PI
        coefa3 = 0.5 * delta1 / (sigma1 * sigma1)
        a3 = a2 + math.exp(delta1 * (1.0 / nq_floor - coefa3)) / coefa3
        coefa4 = 0.5 * delta2 / (sigma2 * sigma2)
        a4 = a3 + math.exp(-delta2 * coefa4) / coefa4

        log_p_floor = math.log(p_floor)
        log_q_floor = math.log(q_floor)
        return cls(
            number=number,
            np_floor=np_floor,
            nq_floor=nq_floor,
            log_p_floor=log_p_floor,
            log_q_floor=log_q_floor,
            delta1=delta1,
            delta2=delta2,
            sigma1=sigma1,
            sigma2=sigma2,
            c=c,
            coefa3=coefa3,
            coefa4=coefa4,
            a1=a1,
            a2=a2,
            a3=a3,
            a4=a4,
            log_prob_at_np_floor=(
                log_binomial_coef(number, np_floor)
                + np_floor * log_p_floor
                + nq_floor * log_q_floor
            ),
        )

    def log_prob_floor(self, k: int) -> float:
        """``log P(X = k)`` for ``X ~ Bin(number, p_floor)``."""
        return (
            log_binomial_coef(self.number, k)
            + k * self.log_p_floor
            + (self.number - k) * self.log_q_floor
        )


def _bernoulli_sum(engine: UniformEngine, number: int, probability: float) -> int:
    if math.isclose(probability, 0.5):
        return sum(standard_bernoulli(engine) for _ in range(number))
    return sum(bernoulli(engine, probability) for _ in range(number))


def _waiting(engine: UniformEngine, number: int, probability: float) -> int:
    total = 0
    for successes in range(number + 1):
        total += geometric(engine, probability) + 1
        if total > number:
            return successes
    return number


def _rejection(engine: UniformEngine, k: BtpeConstants, cap: int) -> int:
    for _ in range(cap):
        u = uniform(engine, 0.0, k.a4)
        if u <= k.a1:
            n = standard_normal(engine)
            y = k.sigma1 * abs(n)
            if y >= k.delta1:
                continue
            x = math.floor(y)
            v = -standard_exponential(engine) - 0.5 * n * n + k.c
        elif u <= k.a2:
            n = standard_normal(engine)
            y = k.sigma2 * abs(n)
            if y >= k.delta2:
                continue
            x = math.floor(-y)
            v = -standard_exponential(engine) - 0.5 * n * n
        elif u <= k.a3:
            w1 = standard_exponential(engine)
            w2 = standard_exponential(engine)
            y = k.delta1 + w1 / k.coefa3
            x = math.floor(y)
            v = -w2 - k.coefa3 * y + k.delta1 / k.nq_floor
        else:
            w1 = standard_exponential(engine)
            w2 = standard_exponential(engine)
            y = k.delta2 + w1 / k.coefa4
            x = math.floor(-y)
            v = -w2 - k.coefa4 * y

        x += k.np_floor
        if 0 <= x <= k.number and v <= k.log_prob_floor(x) - k.log_prob_at_np_floor:
            return x
    warn_rejection_exhausted("Binomial", cap, stacklevel=4)
    return -1


@dataclass(frozen=True, slots=True)
class BinomialSampler:
    """
    Frozen Binomial sampler for one parameter set.

    Attributes
    ----------
    number : int
        Number of trials.
    probability : float
        Success probability.
    split : ProbabilitySplit
        Decomposition of ``min(p, q)``.
    regime : BinomialRegime
        Selected algorithm.
    constants : BtpeConstants or None
        Present only for ``REJECTION``.
    """

    number: int
    probability: float
    split: ProbabilitySplit
    regime: BinomialRegime
    constants: BtpeConstants | None = None

    @classmethod
    def for_parameters(cls, number: int, probability: float) -> BinomialSampler:
        split = ProbabilitySplit.of(number, probability)
        regime = select_regime(number, probability, split)
        constants = (
            BtpeConstants.build(number, split) if regime is BinomialRegime.REJECTION else None
        )
        logger.debug(
            "binomial_regime_selected",
            number=number,
            probability=probability,
            regime=regime.name,
        )
        return cls(
            number=number,
            probability=probability,
            split=split,
            regime=regime,
            constants=constants,
        )

    def _reflect(self, x: int) -> int:
        return self.number - x if self.probability > 0.5 else x

    def __call__(self, engine: UniformEngine) -> int:
        """Draw one variate; ``-1`` if the rejection loop gave up."""
        match self.regime:
            case BinomialRegime.DEGENERATE:
                return self.number if self.probability == 1.0 else 0
            case BinomialRegime.BERNOULLI_SUM:
                return _bernoulli_sum(engine, self.number, self.probability)
            case BinomialRegime.WAITING:
                return self._reflect(_waiting(engine, self.number, self.split.minpq))
            case _:
                assert self.constants is not None
                x = _rejection(engine, self.constants, get_settings().rejection_cap)
                if x < 0:
                    return x
                if self.split.p_res > 0.0:
                    residual = self.split.p_res / (1.0 - self.split.p_floor)
                    x += _waiting(engine, self.number - x, residual)
                return self._reflect(x)


__all__ = [
    "BinomialRegime",
    "BinomialSampler",
    "BtpeConstants",
    "ProbabilitySplit",
    "select_regime",
]
