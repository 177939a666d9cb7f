# src/quant_stochastics/sde/noise.py
"""
Fractional Gaussian noise (fGn).

Correlated Gaussian increments with Hurst exponent H over a uniform grid of
``steps`` points spanning ``horizon``. The exact construction factorises the
(steps x steps) Toeplitz autocovariance matrix

    gamma(k) = 0.5 * (|k + 1|^{2H} - 2 |k|^{2H} + |k - 1|^{2H}),   gamma(0) = 1

with a Cholesky decomposition L and returns

    noise = (horizon / steps)^H * L @ z,   z ~ N(0, I).

H = 0.5 gives the identity matrix, so the result is plain Brownian increments
with variance dt. H < 0.5 gives anti-correlated (rough) increments, H > 0.5
positively correlated (persistent) increments.

Cost is O(steps^3) time and O(steps^2) memory for the factorisation, which
dominates any long-memory simulation. For large grids ``fgn_davies_harte``
samples the same covariance in O(steps log steps) through circulant embedding.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
from scipy import linalg

from quant_stochastics.errors import InvalidParameterError, NumericalInstabilityError
from quant_stochastics.sde.integrators import rng_with_seed

LOGGER = logging.getLogger(__name__)

# Above this many steps the Cholesky route gets slow and memory hungry.
LARGE_STEP_WARNING = 2000


def _validate(hurst: float, steps: int, horizon: float) -> Tuple[float, int, float]:
    try:
        hurst = float(hurst)
        horizon = float(horizon)
        integral = not isinstance(steps, bool) and int(steps) == steps
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidParameterError(
            f"invalid noise parameters hurst={hurst!r}, steps={steps!r}, "
            f"horizon={horizon!r}: {e}"
        ) from e
    if not (0.0 <= hurst <= 1.0):
        raise InvalidParameterError(f"hurst must be in [0, 1], got {hurst}")
    if not integral or steps < 1:
        raise InvalidParameterError(f"steps must be a positive integer, got {steps}")
    if not np.isfinite(horizon) or horizon <= 0.0:
        raise InvalidParameterError(f"horizon must be > 0, got {horizon}")
    return hurst, int(steps), horizon


def fgn_autocovariance(hurst: float, n: int) -> np.ndarray:
    """
    Autocovariance of unit-step fGn at lags 0..n-1.
    """
    k = np.arange(n, dtype=float)
    two_h = 2.0 * float(hurst)
    acf = 0.5 * (
        np.power(k + 1.0, two_h)
        - 2.0 * np.power(k, two_h)
        + np.power(np.abs(k - 1.0), two_h)
    )
    acf[0] = 1.0
    return acf


def fgn_covariance_matrix(hurst: float, n: int) -> np.ndarray:
    """Symmetric Toeplitz covariance matrix of n unit-step fGn increments."""
    return linalg.toeplitz(fgn_autocovariance(hurst, n))


def cholesky_factor(cov: np.ndarray) -> np.ndarray:
    """
    Lower-triangular Cholesky factor of ``cov``.

    Raises
    ------
    NumericalInstabilityError
        If the matrix has non-finite entries or is not positive definite.
    """
    cov = np.asarray(cov, dtype=float)
    if not np.isfinite(cov).all():
        raise NumericalInstabilityError("covariance matrix contains non-finite values")
    try:
        factor = linalg.cholesky(cov, lower=True, check_finite=False)
    except linalg.LinAlgError as e:
        raise NumericalInstabilityError(
            f"covariance matrix of size {cov.shape[0]} is not positive definite: {e}"
        ) from e
    if not np.isfinite(factor).all():
        raise NumericalInstabilityError("Cholesky factor contains non-finite values")
    return factor


class FractionalGaussianNoise:
    """
    Exact fGn sampler for a fixed (hurst, steps, horizon).

    The covariance is built and factorised once at construction; the factor
    is read-only afterwards and can be shared by any number of concurrent
    callers of :meth:`sample`.
    """

    def __init__(self, hurst: float, steps: int, horizon: float):
        self.hurst, self.steps, self.horizon = _validate(hurst, steps, horizon)
        if self.steps > LARGE_STEP_WARNING:
            LOGGER.warning(
                "Cholesky fGn with %d steps needs O(n^3) time and O(n^2) memory; "
                "consider fgn_method='davies_harte' for large grids",
                self.steps,
            )
        self.scale = (self.horizon / self.steps) ** self.hurst
        factor = cholesky_factor(fgn_covariance_matrix(self.hurst, self.steps))
        factor.setflags(write=False)
        self.factor = factor

    def __repr__(self) -> str:
        return (
            f"FractionalGaussianNoise(hurst={self.hurst}, steps={self.steps}, "
            f"horizon={self.horizon})"
        )

    @property
    def dt(self) -> float:
        return self.horizon / self.steps

    def sample(
        self, rng: np.random.Generator, size: Optional[int] = None
    ) -> np.ndarray:
        """
        Draw one noise series of length ``steps`` (or ``size`` of them,
        stacked as rows).
        """
        if size is None:
            z = rng.standard_normal(self.steps)
            return self.scale * (self.factor @ z)
        z = rng.standard_normal((int(size), self.steps))
        return self.scale * (z @ self.factor.T)


def generate_fgn(
    hurst: float,
    steps: int,
    horizon: float,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """
    Generate one fGn realisation of length ``steps`` over ``horizon``.

    Parameters
    ----------
    hurst : float
        Hurst exponent in [0, 1].
    steps : int
        Number of increments (>= 1).
    horizon : float
        Length of the time window (> 0); each increment covers horizon/steps.
    seed, rng :
        Either a seed or an existing Generator. ``rng`` wins when both are given.

    Returns
    -------
    np.ndarray
        Noise series of shape (steps,).
    """
    fgn = FractionalGaussianNoise(hurst, steps, horizon)
    if rng is None:
        rng = rng_with_seed(seed)
    return fgn.sample(rng)


class DaviesHarteNoise:
    """
    fGn through circulant embedding (Davies-Harte), O(n log n) per draw.

    The 2n circulant embedding of the fGn covariance is non-negative definite
    for every H in [0, 1] in exact arithmetic. If rounding produces a
    materially negative eigenvalue the method is not valid for this grid and
    a NumericalInstabilityError is raised. The eigenvalue weights are
    computed once at construction and shared read-only by every draw.
    """

    def __init__(self, hurst: float, steps: int, horizon: float):
        self.hurst, self.steps, self.horizon = _validate(hurst, steps, horizon)
        self.scale = (self.horizon / self.steps) ** self.hurst
        m = 2 * self.steps

        acf = fgn_autocovariance(self.hurst, self.steps + 1)
        c = np.concatenate([acf, acf[-2:0:-1]])
        lam = np.fft.fft(c).real
        tol = 1e-10 * max(float(np.max(np.abs(lam))), 1.0)
        if float(lam.min()) < -tol:
            raise NumericalInstabilityError(
                f"circulant embedding has negative eigenvalue {lam.min():.3e} "
                f"(hurst={self.hurst}, steps={self.steps})"
            )
        lam = np.where(lam < 0.0, 0.0, lam)

        # per-frequency standard deviations of the complex Gaussian weights
        weights = np.sqrt(lam / (2.0 * m))
        weights[0] = np.sqrt(lam[0] / m)
        weights[self.steps] = np.sqrt(lam[self.steps] / m)
        weights.setflags(write=False)
        self.weights = weights

    def __repr__(self) -> str:
        return (
            f"DaviesHarteNoise(hurst={self.hurst}, steps={self.steps}, "
            f"horizon={self.horizon})"
        )

    def sample(
        self, rng: np.random.Generator, size: Optional[int] = None
    ) -> np.ndarray:
        n = self.steps
        m = 2 * n
        batch = 1 if size is None else int(size)

        z = rng.standard_normal((batch, m))
        w = np.empty((batch, m), dtype=np.complex128)
        w[:, 0] = self.weights[0] * z[:, 0]
        w[:, n] = self.weights[n] * z[:, n]
        k = np.arange(1, n)
        w[:, k] = self.weights[k] * (z[:, k] + 1j * z[:, n + k])
        w[:, m - k] = np.conj(w[:, k])

        noise = self.scale * np.fft.fft(w, axis=1).real[:, :n]
        return noise[0] if size is None else noise


def fgn_davies_harte(
    hurst: float,
    steps: int,
    horizon: float,
    rng: np.random.Generator,
    size: Optional[int] = None,
) -> np.ndarray:
    """One-off Davies-Harte draw. See ``DaviesHarteNoise``."""
    return DaviesHarteNoise(hurst, steps, horizon).sample(rng, size=size)


def fbm_from_fgn(noise: np.ndarray) -> np.ndarray:
    """Fractional Brownian motion path (starting at 0) from its increments."""
    noise = np.asarray(noise, dtype=float)
    zeros = np.zeros(noise.shape[:-1] + (1,), dtype=float)
    return np.concatenate([zeros, np.cumsum(noise, axis=-1)], axis=-1)


__all__ = [
    "LARGE_STEP_WARNING",
    "DaviesHarteNoise",
    "FractionalGaussianNoise",
    "cholesky_factor",
    "fbm_from_fgn",
    "fgn_autocovariance",
    "fgn_covariance_matrix",
    "fgn_davies_harte",
    "generate_fgn",
]
