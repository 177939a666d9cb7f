# src/quant_stochastics/sde/trajectories.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True, eq=False)
class Trajectories:
    """
    Simulated sample paths on a common time grid.

    times: shape (n_steps + 1,), strictly increasing, times[0] = t0, times[-1] = tn
    paths: shape (n_paths, n_steps + 1), paths[:, 0] = x0

    Both arrays are copied on construction and made read-only.
    """

    times: np.ndarray
    paths: np.ndarray

    def __post_init__(self):
        times = np.array(self.times, dtype=float)
        paths = np.array(self.paths, dtype=float)
        if times.ndim != 1:
            raise ValueError("times must be a 1D array.")
        if paths.ndim != 2 or paths.shape[1] != times.size:
            raise ValueError(
                f"paths must have shape (n_paths, {times.size}), got {paths.shape}."
            )
        times.setflags(write=False)
        paths.setflags(write=False)
        object.__setattr__(self, "times", times)
        object.__setattr__(self, "paths", paths)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trajectories):
            return NotImplemented
        return np.array_equal(self.times, other.times) and np.array_equal(
            self.paths, other.paths
        )

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return self.n_paths

    def __repr__(self) -> str:
        return (
            f"Trajectories(n_paths={self.n_paths}, n_steps={self.n_steps}, "
            f"t0={self.times[0]}, tn={self.times[-1]})"
        )

    @property
    def n_paths(self) -> int:
        return int(self.paths.shape[0])

    @property
    def n_steps(self) -> int:
        return int(self.times.size - 1)

    @property
    def dt(self) -> float:
        return float((self.times[-1] - self.times[0]) / self.n_steps)

    @property
    def initial_values(self) -> np.ndarray:
        return self.paths[:, 0]

    @property
    def terminal_values(self) -> np.ndarray:
        return self.paths[:, -1]

    def mean(self) -> np.ndarray:
        """Cross-sectional mean at each time point."""
        return self.paths.mean(axis=0)

    def variance(self, ddof: int = 1) -> np.ndarray:
        """Cross-sectional variance at each time point."""
        if self.n_paths <= ddof:
            raise ValueError(f"need more than {ddof} paths for variance.")
        return self.paths.var(axis=0, ddof=ddof)

    def to_frame(self) -> pd.DataFrame:
        """Time-indexed DataFrame with one column per path."""
        return pd.DataFrame(
            self.paths.T,
            index=pd.Index(self.times, name="t"),
            columns=[f"path_{i}" for i in range(self.n_paths)],
        )
