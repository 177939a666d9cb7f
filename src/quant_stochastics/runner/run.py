from __future__ import annotations

import logging
import time
from pathlib import Path

from quant_stochastics.runner.config.loader import load_config
from quant_stochastics.runner.config.models import RunConfig
from quant_stochastics.runner.registry import create_process
from quant_stochastics.sde.simulators.simulator import Simulator
from quant_stochastics.sde.trajectories import Trajectories

LOGGER = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Basic console logging for scripts; library modules never call this."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ======================================================================
# Main entrypoint
# ======================================================================


def run_from_config(cfg: str | Path | RunConfig) -> Trajectories:
    """
    Build the configured process and simulate it.

    ``cfg`` is either a path to a YAML/JSON file or an already validated
    RunConfig.
    """
    if not isinstance(cfg, RunConfig):
        cfg = load_config(cfg)

    process = create_process(cfg.process.name, cfg.process.params)
    LOGGER.info("Run '%s': %r", cfg.name, process)

    start = time.perf_counter()
    trajectories = Simulator(process, cfg.simulation).euler()
    elapsed = time.perf_counter() - start

    terminal = trajectories.terminal_values
    LOGGER.info(
        "Run '%s' finished in %.3fs: %d paths, terminal mean=%.6g, min=%.6g, max=%.6g",
        cfg.name,
        elapsed,
        trajectories.n_paths,
        float(terminal.mean()),
        float(terminal.min()),
        float(terminal.max()),
    )
    return trajectories
