from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from quant_stochastics.sde.schemas import ProcessSpec, SimConfig


# ============================================================
# Top-level RunConfig
# ============================================================


class RunConfig(BaseModel):
    """
    One simulation run: which process to build and how to simulate it.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = "default_run"

    process: ProcessSpec
    simulation: SimConfig

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Level applied by configure_logging."
    )
