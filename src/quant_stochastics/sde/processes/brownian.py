# src/quant_stochastics/sde/processes/brownian.py
from __future__ import annotations

from dataclasses import dataclass

from quant_stochastics.sde.processes.base import (
    StochasticProcess,
    check_finite,
    check_hurst,
    check_non_negative,
)


@dataclass(frozen=True)
class BrownianMotion(StochasticProcess):
    """Standard Wiener process: dX_t = dW_t."""

    def drift(self, x: float, t: float) -> float:
        return 0.0

    def diffusion(self, x: float, t: float) -> float:
        return 1.0


@dataclass(frozen=True)
class ArithmeticBrownianMotion(StochasticProcess):
    """
    Brownian motion with drift:

        dX_t = mu dt + sigma dW_t
    """

    mu: float
    sigma: float

    def __post_init__(self):
        self._store("mu", check_finite("mu", self.mu))
        self._store("sigma", check_non_negative("sigma", self.sigma))

    def drift(self, x: float, t: float) -> float:
        return self.mu

    def diffusion(self, x: float, t: float) -> float:
        return self.sigma


@dataclass(frozen=True)
class GeometricBrownianMotion(StochasticProcess):
    """
    Geometric Brownian Motion:

        dS_t = mu S_t dt + sigma S_t dW_t
    """

    mu: float
    sigma: float

    def __post_init__(self):
        self._store("mu", check_finite("mu", self.mu))
        self._store("sigma", check_non_negative("sigma", self.sigma))

    def drift(self, x: float, t: float) -> float:
        return self.mu * x

    def diffusion(self, x: float, t: float) -> float:
        return self.sigma * x


@dataclass(frozen=True)
class FractionalBrownianMotion(StochasticProcess):
    """
    Fractional Brownian motion B^H with Hurst exponent H in [0, 1]:

        dX_t = dB^H_t

    H = 0.5 is standard Brownian motion.
    """

    hurst: float

    def __post_init__(self):
        self._store("hurst", check_hurst(self.hurst))

    def drift(self, x: float, t: float) -> float:
        return 0.0

    def diffusion(self, x: float, t: float) -> float:
        return 1.0
