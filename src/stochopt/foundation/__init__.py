"""Building blocks shared by every metaheuristic: elements, problems, errors, observers."""
