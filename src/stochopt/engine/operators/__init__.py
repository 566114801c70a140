from .genetic import (
    CROSSOVERS,
    MUTATIONS,
    SELECTIONS,
    rank_selection,
    recombination_mutation,
    resolve_operator,
    roulette_selection,
    single_point_biased_mutation,
    single_point_crossover,
    single_point_uniform_mutation,
    stochastic_universal_sampling,
    two_point_crossover,
    uniform_crossover,
)

__all__ = [
    "SELECTIONS",
    "CROSSOVERS",
    "MUTATIONS",
    "rank_selection",
    "roulette_selection",
    "stochastic_universal_sampling",
    "single_point_crossover",
    "two_point_crossover",
    "uniform_crossover",
    "single_point_uniform_mutation",
    "single_point_biased_mutation",
    "recombination_mutation",
    "resolve_operator",
]
