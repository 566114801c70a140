"""Metaheuristic run configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .base import _SerializableConfig, _require_fields

_KNOWN_FIELDS = ("algorithm", "size", "steps", "seed", "params")


@dataclass(frozen=True)
class MetaheuristicConfigData(_SerializableConfig):
    algorithm: str
    size: Optional[int] = None
    steps: Optional[int] = None
    seed: Optional[int] = None
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MetaheuristicConfigData":
        """Build from a mapping; unknown top level keys are taken as strategy parameters."""
        config = MetaheuristicConfig()
        extra = {key: value for key, value in data.items() if key not in _KNOWN_FIELDS}
        if data.get("algorithm") is not None:
            config.algorithm(data["algorithm"])
        for name in ("size", "steps", "seed"):
            if data.get(name) is not None:
                getattr(config, name)(data[name])
        config.params(**dict(data.get("params") or {}), **extra)
        return config.fixed()

    def metaheuristic_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the metaheuristic constructor."""
        kwargs = dict(self.params)
        if self.size is not None:
            kwargs["size"] = self.size
        if self.steps is not None:
            kwargs["steps"] = self.steps
        return kwargs


class MetaheuristicConfig:
    """Declarative configuration holder for a metaheuristic run.

    Example::

        cfg = MetaheuristicConfig().algorithm("hill_climbing").steps(50).param("delta", 0.1).fixed()
    """

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {"params": {}}

    def algorithm(self, name: str) -> "MetaheuristicConfig":
        self._cfg["algorithm"] = str(name)
        return self

    def size(self, value: int) -> "MetaheuristicConfig":
        self._cfg["size"] = int(value)
        return self

    def steps(self, value: int) -> "MetaheuristicConfig":
        self._cfg["steps"] = int(value)
        return self

    def seed(self, value: int) -> "MetaheuristicConfig":
        self._cfg["seed"] = int(value)
        return self

    def param(self, name: str, value: Any) -> "MetaheuristicConfig":
        self._cfg["params"][name] = value
        return self

    def params(self, **values: Any) -> "MetaheuristicConfig":
        self._cfg["params"].update(values)
        return self

    def fixed(self) -> MetaheuristicConfigData:
        _require_fields(self._cfg, ("algorithm",), "MetaheuristicConfig")
        return MetaheuristicConfigData(
            algorithm=self._cfg["algorithm"],
            size=self._cfg.get("size"),
            steps=self._cfg.get("steps"),
            seed=self._cfg.get("seed"),
            params=dict(self._cfg["params"]),
        )


__all__ = ["MetaheuristicConfig", "MetaheuristicConfigData"]
