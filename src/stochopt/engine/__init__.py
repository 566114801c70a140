"""The metaheuristic engine, its strategy variants, operators and configuration."""

from .metaheuristic import Metaheuristic
from .registry import available_metaheuristics, build_metaheuristic

__all__ = ["Metaheuristic", "available_metaheuristics", "build_metaheuristic"]
