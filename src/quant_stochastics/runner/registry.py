from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Type

from quant_stochastics.errors import InvalidParameterError
from quant_stochastics.sde.processes.base import StochasticProcess
from quant_stochastics.sde.processes.brownian import (
    ArithmeticBrownianMotion,
    BrownianMotion,
    FractionalBrownianMotion,
    GeometricBrownianMotion,
)
from quant_stochastics.sde.processes.cir import (
    CoxIngersollRoss,
    FractionalCoxIngersollRoss,
)
from quant_stochastics.sde.processes.jump_diffusion import MertonJumpDiffusion
from quant_stochastics.sde.processes.ou import (
    FractionalOrnsteinUhlenbeck,
    OrnsteinUhlenbeck,
)


# ===============================================================
# Process Registry
# ===============================================================

PROCESS_REGISTRY: Dict[str, Type[StochasticProcess]] = {}


def register_process(name: str, cls: Type[StochasticProcess]) -> None:
    """Register a StochasticProcess class under a config name."""
    if not (isinstance(cls, type) and issubclass(cls, StochasticProcess)):
        raise TypeError(f"{cls!r} is not a StochasticProcess subclass")
    PROCESS_REGISTRY[name] = cls


def get_process_class(name: str) -> Type[StochasticProcess]:
    if name not in PROCESS_REGISTRY:
        raise KeyError(
            f"Process '{name}' not registered. "
            f"Available: {sorted(PROCESS_REGISTRY.keys())}"
        )
    return PROCESS_REGISTRY[name]


# ===============================================================
# Param Validation
# ===============================================================


def get_process_params(name: str) -> List[str]:
    cls = get_process_class(name)
    return [f.name for f in dataclasses.fields(cls)] if dataclasses.is_dataclass(cls) else []


def _validate_params(name: str, params: Dict[str, Any]) -> Dict[str, Any]:
    expected = get_process_params(name)

    unknown = sorted(set(params) - set(expected))
    if unknown:
        raise InvalidParameterError(
            f"Unknown parameters for process '{name}': {unknown}. Expected: {expected}"
        )

    missing = [p for p in expected if p not in params]
    if missing:
        raise InvalidParameterError(
            f"Missing required parameters for process '{name}': {missing}"
        )

    for p, v in params.items():
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise InvalidParameterError(
                f"Parameter '{p}' expected a number, got {type(v).__name__}"
            )

    return dict(params)


# ===============================================================
# Process Creation
# ===============================================================


def create_process(
    name: str,
    params: Dict[str, Any] | None = None,
) -> StochasticProcess:
    cls = get_process_class(name)
    params = _validate_params(name, dict(params or {}))
    return cls(**params)


# ===============================================================
# REGISTER PROCESSES
# ===============================================================

register_process("brownian", BrownianMotion)
register_process("arithmetic_brownian", ArithmeticBrownianMotion)
register_process("gbm", GeometricBrownianMotion)
register_process("ou", OrnsteinUhlenbeck)
register_process("cir", CoxIngersollRoss)
register_process("fbm", FractionalBrownianMotion)
register_process("fractional_ou", FractionalOrnsteinUhlenbeck)
register_process("fractional_cir", FractionalCoxIngersollRoss)
register_process("merton", MertonJumpDiffusion)
