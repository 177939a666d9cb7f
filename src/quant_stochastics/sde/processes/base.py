# src/quant_stochastics/sde/processes/base.py
from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np

from quant_stochastics.errors import InvalidParameterError

if TYPE_CHECKING:
    from quant_stochastics.sde.trajectories import Trajectories


class StochasticProcess(ABC):
    """
    One-dimensional SDE

        dX_t = a(X_t, t) dt + b(X_t, t) dN_t + J(X_t, t)

    where N is standard Brownian motion, or fractional Brownian motion when
    the process carries a Hurst exponent, and J is an optional jump term
    added once per step.

    Implementations hold only immutable parameters, so drift/diffusion/jump
    can be evaluated concurrently from any number of paths.
    """

    @abstractmethod
    def drift(self, x: float, t: float) -> float:
        ...

    @abstractmethod
    def diffusion(self, x: float, t: float) -> float:
        ...

    def jump(
        self, x: float, t: float, dt: float, rng: np.random.Generator
    ) -> Optional[float]:
        """
        Realised jump over a step of length dt starting at (x, t), or None.

        ``rng`` is the generator of the path being stepped, so jump-diffusion
        variants stay reproducible per path.
        """
        return None

    # Hurst exponent of the driving noise; None for Brownian drivers.
    hurst: Optional[float] = None

    @property
    def requires_long_memory(self) -> bool:
        return self.hurst is not None

    def _store(self, name: str, value: float) -> None:
        # bypass the frozen dataclass __setattr__
        object.__setattr__(self, name, value)

    def simulate(
        self,
        x0: float,
        t0: float,
        tn: float,
        n_steps: int,
        n_paths: int,
        parallel: bool = False,
        seed: int | None = None,
        **kwargs,
    ) -> "Trajectories":
        """Euler-Maruyama simulation of this process. See ``simulate``."""
        from quant_stochastics.sde.simulators.simulator import simulate

        return simulate(
            self,
            x0=x0,
            t0=t0,
            tn=tn,
            n_steps=n_steps,
            n_paths=n_paths,
            parallel=parallel,
            seed=seed,
            **kwargs,
        )


# ---------------------------------------------------------------------------
# Parameter guards shared by the concrete processes
# ---------------------------------------------------------------------------


def check_finite(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    return value


def check_non_negative(name: str, value: float) -> float:
    value = check_finite(name, value)
    if value < 0.0:
        raise InvalidParameterError(f"{name} must be >= 0, got {value}")
    return value


def check_hurst(value: float) -> float:
    value = check_finite("hurst", value)
    if not (0.0 <= value <= 1.0):
        raise InvalidParameterError(f"hurst must be in [0, 1], got {value}")
    return value
