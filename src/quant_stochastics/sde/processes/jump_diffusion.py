# src/quant_stochastics/sde/processes/jump_diffusion.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from quant_stochastics.sde.processes.base import (
    StochasticProcess,
    check_finite,
    check_non_negative,
)


@dataclass(frozen=True)
class MertonJumpDiffusion(StochasticProcess):
    """
    Merton jump-diffusion:

        dS_t / S_{t-} = (mu - lambda_ k) dt + sigma dW_t + (e^Y - 1) dN_t

    N is a Poisson process with intensity lambda_ and the log jump sizes are
    Y ~ N(jump_mean, jump_std^2). k = E[e^Y - 1] compensates the drift so
    that mu stays the expected rate of return.
    """

    mu: float
    sigma: float
    lambda_: float
    jump_mean: float
    jump_std: float

    def __post_init__(self):
        self._store("mu", check_finite("mu", self.mu))
        self._store("sigma", check_non_negative("sigma", self.sigma))
        self._store("lambda_", check_non_negative("lambda_", self.lambda_))
        self._store("jump_mean", check_finite("jump_mean", self.jump_mean))
        self._store("jump_std", check_non_negative("jump_std", self.jump_std))

    @property
    def compensator(self) -> float:
        return math.exp(self.jump_mean + 0.5 * self.jump_std**2) - 1.0

    def drift(self, x: float, t: float) -> float:
        return (self.mu - self.lambda_ * self.compensator) * x

    def diffusion(self, x: float, t: float) -> float:
        return self.sigma * x

    def jump(
        self, x: float, t: float, dt: float, rng: np.random.Generator
    ) -> Optional[float]:
        n_jumps = int(rng.poisson(self.lambda_ * dt))
        if n_jumps == 0:
            return None
        log_sizes = rng.normal(self.jump_mean, self.jump_std, size=n_jumps)
        return x * float(np.sum(np.expm1(log_sizes)))
