# src/quant_stochastics/sde/schemas.py
from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


NoisePolicy = Literal["independent", "shared"]
FGNMethod = Literal["cholesky", "davies_harte"]


class SimConfig(BaseModel):
    """
    Generic simulation configuration.

    n_paths: number of Monte-Carlo paths
    n_steps: number of time steps (path length will be n_steps + 1 including t0)
    t0, tn: start and end of the time window (tn > t0)
    x0: initial state of every path
    seed: Optional RNG seed for deterministic runs
    parallel: fan paths out over a thread pool
    max_workers: thread pool size (None lets the executor decide)
    noise_policy: "independent" draws fractional noise per path, "shared"
        reuses one realisation for every path
    fgn_method: exact Cholesky factorisation or Davies-Harte circulant embedding
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    n_paths: int = Field(..., ge=1)
    n_steps: int = Field(..., ge=1)
    t0: float = 0.0
    tn: float = 1.0
    x0: float = 0.0
    seed: Optional[int] = Field(default=None, ge=0)
    parallel: bool = False
    max_workers: Optional[int] = Field(default=None, ge=1)
    noise_policy: NoisePolicy = "independent"
    fgn_method: FGNMethod = "cholesky"

    @model_validator(mode="after")
    def _check_window(self) -> "SimConfig":
        if not self.tn > self.t0:
            raise ValueError(f"tn must be greater than t0, got t0={self.t0}, tn={self.tn}")
        return self

    @property
    def dt(self) -> float:
        return (self.tn - self.t0) / self.n_steps


class ProcessSpec(BaseModel):
    """
    Named process with its constructor parameters, e.g.

        {"name": "fractional_ou", "params": {"mu": 0.15, "sigma": 0.45, ...}}
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    params: Dict[str, Any] = Field(default_factory=dict)
