# src/quant_stochastics/sde/processes/cir.py
from __future__ import annotations

import math
from dataclasses import dataclass

from quant_stochastics.sde.processes.base import (
    StochasticProcess,
    check_finite,
    check_hurst,
    check_non_negative,
)


def _sqrt_pos(x: float) -> float:
    # full truncation: the square root only sees the positive part of x
    return math.sqrt(x) if x > 0.0 else 0.0


@dataclass(frozen=True)
class CoxIngersollRoss(StochasticProcess):
    """
    Cox-Ingersoll-Ross short-rate model:

        dr_t = theta (mu - r_t) dt + sigma sqrt(r_t) dW_t

    The Euler scheme can step below zero; the diffusion then evaluates to 0
    and the drift pulls the rate back toward mu.
    """

    mu: float
    sigma: float
    theta: float

    def __post_init__(self):
        self._store("mu", check_finite("mu", self.mu))
        self._store("sigma", check_non_negative("sigma", self.sigma))
        self._store("theta", check_non_negative("theta", self.theta))

    def drift(self, x: float, t: float) -> float:
        return self.theta * (self.mu - x)

    def diffusion(self, x: float, t: float) -> float:
        return self.sigma * _sqrt_pos(x)


@dataclass(frozen=True)
class FractionalCoxIngersollRoss(StochasticProcess):
    """
    CIR process driven by fractional Brownian motion:

        dr_t = theta (mu - r_t) dt + sigma sqrt(r_t) dB^H_t
    """

    mu: float
    sigma: float
    theta: float
    hurst: float

    def __post_init__(self):
        self._store("mu", check_finite("mu", self.mu))
        self._store("sigma", check_non_negative("sigma", self.sigma))
        self._store("theta", check_non_negative("theta", self.theta))
        self._store("hurst", check_hurst(self.hurst))

    def drift(self, x: float, t: float) -> float:
        return self.theta * (self.mu - x)

    def diffusion(self, x: float, t: float) -> float:
        return self.sigma * _sqrt_pos(x)
