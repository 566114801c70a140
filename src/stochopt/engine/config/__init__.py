from .loader import load_run_spec
from .metaheuristic import MetaheuristicConfig, MetaheuristicConfigData

__all__ = ["MetaheuristicConfig", "MetaheuristicConfigData", "load_run_spec"]
