"""
Run specification loading shared by :func:`stochopt.run_from_spec` and
programmatic entrypoints.

A run specification names a problem and a metaheuristic::

    problem:
      name: sphere
      length: 3
    algorithm: hill_climbing
    size: 1
    steps: 50
    seed: 7
    params:
      delta: 0.1
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml

from stochopt.foundation.exceptions import ConfigurationError

from .base import _require_fields


def load_run_spec(path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML or JSON run specification.

    A bare string ``problem`` is expanded to ``{"name": problem}``.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    MissingConfigError
        If ``problem`` or ``algorithm`` is missing.
    ConfigurationError
        If the file does not hold a mapping.
    """
    spec_path = Path(path).expanduser().resolve()
    if not spec_path.exists():
        raise FileNotFoundError(f"Config file '{spec_path}' does not exist.")
    with spec_path.open("r", encoding="utf-8") as fh:
        if spec_path.suffix.lower() in {".yaml", ".yml"}:
            spec = yaml.safe_load(fh) or {}
        else:
            spec = json.load(fh)
    if not isinstance(spec, dict):
        raise ConfigurationError(
            f"Run specification '{spec_path}' must be a mapping, got {type(spec).__name__}.",
            "Write the specification as key/value pairs",
        )
    _require_fields(spec, ("problem", "algorithm"), "run specification")
    if isinstance(spec["problem"], str):
        spec["problem"] = {"name": spec["problem"]}
    _require_fields(spec["problem"], ("name",), "run specification problem")
    return spec


__all__ = ["load_run_spec"]
