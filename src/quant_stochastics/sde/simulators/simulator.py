# src/quant_stochastics/sde/simulators/simulator.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

import numpy as np
from pydantic import ValidationError

from quant_stochastics.errors import InvalidParameterError, NumericalInstabilityError
from quant_stochastics.sde.integrators import (
    euler_maruyama_step,
    gaussian_increments,
    spawn_generators,
)
from quant_stochastics.sde.noise import DaviesHarteNoise, FractionalGaussianNoise
from quant_stochastics.sde.processes.base import StochasticProcess
from quant_stochastics.sde.schemas import SimConfig
from quant_stochastics.sde.trajectories import Trajectories

LOGGER = logging.getLogger(__name__)

NoiseSource = Callable[[np.random.Generator], np.ndarray]


class Simulator:
    """
    Euler-Maruyama engine for any StochasticProcess.

    Every path i gets its own random stream spawned from the root seed, so a
    given seed yields the same paths whether they are computed sequentially
    or on a thread pool.

    The thread pool keeps the model shared and the results deterministic, but
    the per-step loop runs Python code under the GIL, so ``parallel=True``
    gives no CPU speedup. For real parallelism split the paths into batches,
    give each batch a child seed and run them in a ``ProcessPoolExecutor``.
    """

    def __init__(self, sde: StochasticProcess, config: SimConfig):
        if not isinstance(sde, StochasticProcess):
            raise TypeError(
                f"sde must be a StochasticProcess, got {type(sde).__name__}"
            )
        self.sde = sde
        self.config = config
        self.dt = config.dt
        self.times = np.linspace(config.t0, config.tn, config.n_steps + 1)

    # ------------------------------------------------------------------
    # Noise
    # ------------------------------------------------------------------

    def _noise_source(self, root: np.random.SeedSequence) -> NoiseSource:
        cfg = self.config
        if not self.sde.requires_long_memory:
            return lambda rng: gaussian_increments(rng, cfg.n_steps, self.dt)

        hurst = float(self.sde.hurst)
        horizon = cfg.tn - cfg.t0
        draw: NoiseSource
        if cfg.fgn_method == "cholesky":
            draw = FractionalGaussianNoise(hurst, cfg.n_steps, horizon).sample
        else:
            draw = DaviesHarteNoise(hurst, cfg.n_steps, horizon).sample

        if cfg.noise_policy == "independent":
            return draw

        shared_rng = np.random.default_rng(root.spawn(1)[0])
        shared = draw(shared_rng)
        shared.setflags(write=False)
        return lambda rng: shared

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _step_path(
        self, index: int, noise: np.ndarray, rng: np.random.Generator
    ) -> np.ndarray:
        sde = self.sde
        dt = self.dt
        times = self.times.tolist()
        dW = noise.tolist()

        path = np.empty(self.config.n_steps + 1, dtype=float)
        x = float(self.config.x0)
        path[0] = x
        for i in range(self.config.n_steps):
            t = times[i]
            jump = sde.jump(x, t, dt, rng)
            x = euler_maruyama_step(
                x,
                sde.drift(x, t),
                sde.diffusion(x, t),
                dt,
                dW[i],
                0.0 if jump is None else jump,
            )
            path[i + 1] = x

        finite = np.isfinite(path)
        if not finite.all():
            step = int(np.argmin(finite))
            raise NumericalInstabilityError(
                f"path {index} became non-finite at step {step} (t={times[step]:.6g})"
            )
        return path

    def euler(self) -> Trajectories:
        cfg = self.config
        root = np.random.SeedSequence(cfg.seed)
        rngs = spawn_generators(root, cfg.n_paths)
        noise_source = self._noise_source(root)

        def run_path(i: int) -> np.ndarray:
            rng = rngs[i]
            return self._step_path(i, noise_source(rng), rng)

        LOGGER.debug(
            "Simulating %s: %d paths x %d steps on [%g, %g] (parallel=%s, noise=%s)",
            type(self.sde).__name__,
            cfg.n_paths,
            cfg.n_steps,
            cfg.t0,
            cfg.tn,
            cfg.parallel,
            cfg.noise_policy if self.sde.requires_long_memory else "brownian",
        )

        if cfg.parallel:
            with ThreadPoolExecutor(max_workers=cfg.max_workers) as pool:
                rows: List[np.ndarray] = list(pool.map(run_path, range(cfg.n_paths)))
        else:
            rows = [run_path(i) for i in range(cfg.n_paths)]

        return Trajectories(times=self.times, paths=np.vstack(rows))


def simulate(
    model: StochasticProcess,
    x0: float,
    t0: float,
    tn: float,
    n_steps: int,
    n_paths: int,
    parallel: bool = False,
    seed: int | None = None,
    noise_policy: str = "independent",
    max_workers: Optional[int] = None,
    fgn_method: str = "cholesky",
) -> Trajectories:
    """
    Simulate ``n_paths`` Euler-Maruyama paths of ``model`` on [t0, tn].

        x[i+1] = x[i] + a(x[i], t[i]) dt + b(x[i], t[i]) dN[i] + J(x[i], t[i])

    dN is independent N(0, dt) noise for Brownian-driven models and
    fractional Gaussian noise for models with a Hurst exponent.

    Parameters
    ----------
    model : StochasticProcess
        Process to simulate.
    x0 : float
        Initial state of every path.
    t0, tn : float
        Time window, tn > t0.
    n_steps, n_paths : int
        Grid size and number of paths, both >= 1.
    parallel : bool
        Compute paths on a thread pool instead of sequentially. Results are
        identical for the same seed.
        The step loop holds the GIL, so this does not speed up CPU-bound
        runs; use a process pool over seeded batches for that.
    seed : int | None
        Root seed; path i uses the i-th stream spawned from it.
    noise_policy : {"independent", "shared"}
        For long-memory models, draw fractional noise per path or reuse one
        realisation for every path.
    max_workers : int | None
        Thread pool size when ``parallel`` is set.
    fgn_method : {"cholesky", "davies_harte"}
        Fractional noise construction.

    Returns
    -------
    Trajectories

    Raises
    ------
    InvalidParameterError
        On any invalid argument, before simulation work starts.
    NumericalInstabilityError
        If the fractional noise covariance cannot be factorised or a path
        becomes non-finite.
    """
    try:
        config = SimConfig(
            n_paths=n_paths,
            n_steps=n_steps,
            t0=t0,
            tn=tn,
            x0=x0,
            seed=seed,
            parallel=parallel,
            max_workers=max_workers,
            noise_policy=noise_policy,
            fgn_method=fgn_method,
        )
    except ValidationError as e:
        raise InvalidParameterError(f"Invalid simulation parameters: {e}") from e

    return Simulator(model, config).euler()


__all__ = ["Simulator", "simulate"]
