# src/quant_stochastics/sde/integrators.py
from __future__ import annotations

import math
from typing import List

import numpy as np


def rng_with_seed(seed: int | None) -> np.random.Generator:
    """Create a numpy Generator deterministically from seed if provided."""
    return np.random.default_rng(seed)


def spawn_generators(
    seed: int | np.random.SeedSequence | None, n: int
) -> List[np.random.Generator]:
    """
    Spawn ``n`` statistically independent generators from one root seed.

    Child ``i`` depends only on (seed, i), so path ``i`` of a simulation
    sees the same random stream no matter how paths are scheduled.
    """
    root = (
        seed
        if isinstance(seed, np.random.SeedSequence)
        else np.random.SeedSequence(seed)
    )
    return [np.random.default_rng(child) for child in root.spawn(int(n))]


def euler_maruyama_step(
    x: float,
    drift: float,
    diffusion: float,
    dt: float,
    dW: float,
    jump: float = 0.0,
) -> float:
    """
    Single Euler-Maruyama step:
    X_{t+dt} = X_t + a(X_t)*dt + b(X_t)*dW + J
    Here we pass precomputed drift, diffusion and jump scalars for speed.
    """
    return x + drift * dt + diffusion * dW + jump


def gaussian_increments(rng: np.random.Generator, n: int, dt: float) -> np.ndarray:
    """
    Return n independent normal increments with variance dt.
    """
    return rng.standard_normal(n) * math.sqrt(dt)
