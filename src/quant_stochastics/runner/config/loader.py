from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from quant_stochastics.errors import InvalidParameterError
from quant_stochastics.runner.config.models import RunConfig


def load_config(path: str | Path) -> RunConfig:
    """
    Load a RunConfig from YAML or JSON.

    Automatically validates using Pydantic v2.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    text = path.read_text()

    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise InvalidParameterError("Config path must be YAML or JSON.")

    try:
        if suffix == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidParameterError(f"Failed to parse config: {e}") from e

    try:
        return RunConfig.model_validate(raw)
    except ValidationError as e:
        raise InvalidParameterError(f"Invalid RunConfig: {e}") from e
