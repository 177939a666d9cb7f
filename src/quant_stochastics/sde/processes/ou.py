# src/quant_stochastics/sde/processes/ou.py
from __future__ import annotations

from dataclasses import dataclass

from quant_stochastics.sde.processes.base import (
    StochasticProcess,
    check_finite,
    check_hurst,
    check_non_negative,
)


@dataclass(frozen=True)
class OrnsteinUhlenbeck(StochasticProcess):
    """
    Ornstein-Uhlenbeck / mean-reverting process:

        dX_t = theta (mu - X_t) dt + sigma dW_t

    mu: long-run mean
    sigma: volatility
    theta: mean-reversion speed
    """

    mu: float
    sigma: float
    theta: float

    def __post_init__(self):
        self._store("mu", check_finite("mu", self.mu))
        self._store("sigma", check_non_negative("sigma", self.sigma))
        self._store("theta", check_finite("theta", self.theta))

    def drift(self, x: float, t: float) -> float:
        return self.theta * (self.mu - x)

    def diffusion(self, x: float, t: float) -> float:
        return self.sigma


@dataclass(frozen=True)
class FractionalOrnsteinUhlenbeck(StochasticProcess):
    """
    Ornstein-Uhlenbeck process driven by fractional Brownian motion:

        dX_t = theta (mu - X_t) dt + sigma dB^H_t

    The Hurst exponent controls the memory of the noise; H = 0.5 recovers
    the classical OU process.
    """

    mu: float
    sigma: float
    theta: float
    hurst: float

    def __post_init__(self):
        self._store("mu", check_finite("mu", self.mu))
        self._store("sigma", check_non_negative("sigma", self.sigma))
        self._store("theta", check_finite("theta", self.theta))
        self._store("hurst", check_hurst(self.hurst))

    def drift(self, x: float, t: float) -> float:
        return self.theta * (self.mu - x)

    def diffusion(self, x: float, t: float) -> float:
        return self.sigma
