"""
Lifecycle notifications emitted by metaheuristic runs.

Listeners are registered explicitly on a metaheuristic (``listeners=[...]``)
and receive ``(event, metaheuristic)`` for every lifecycle step. Listeners
observe the run; they must not mutate ``metaheuristic.state``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stochopt.engine.metaheuristic import Metaheuristic


class LifecycleEvent(str, Enum):
    """Named stages of a metaheuristic run, in the order they occur."""

    INITIATED = "initiated"
    EXPANDED = "expanded"
    EVALUATED = "evaluated"
    SIEVED = "sieved"
    UPDATED = "updated"
    ANALYZED = "analyzed"
    ADVANCED = "advanced"
    FINISHED = "finished"


@runtime_checkable
class MetaheuristicListener(Protocol):
    """Observer interface for metaheuristic lifecycle events."""

    def on_event(self, event: LifecycleEvent, metaheuristic: "Metaheuristic") -> None: ...


class LoggingListener:
    """
    Logs run progress: the best evaluation after every step and the final
    best element.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger("stochopt.progress")
        self.level = level

    def on_event(self, event: LifecycleEvent, metaheuristic: "Metaheuristic") -> None:
        if event is LifecycleEvent.ADVANCED:
            best = metaheuristic.state[0] if metaheuristic.state else None
            self.logger.log(
                self.level,
                "%s step %d/%d: best evaluation %s",
                type(metaheuristic).__name__,
                metaheuristic.step,
                metaheuristic.steps,
                best.evaluation if best is not None else "n/a",
            )
        elif event is LifecycleEvent.FINISHED:
            best = metaheuristic.state[0] if metaheuristic.state else None
            self.logger.log(self.level, "%s finished at step %d with %r", type(metaheuristic).__name__, metaheuristic.step, best)


class EventRecorder:
    """Keeps the sequence of events received, with the step each happened at."""

    def __init__(self) -> None:
        self.events: list[tuple[LifecycleEvent, int]] = []

    def on_event(self, event: LifecycleEvent, metaheuristic: "Metaheuristic") -> None:
        self.events.append((event, metaheuristic.step))

    def count(self, event: LifecycleEvent) -> int:
        return sum(1 for recorded, _ in self.events if recorded is event)

    def names(self) -> list[str]:
        return [event.value for event, _ in self.events]


__all__ = ["LifecycleEvent", "MetaheuristicListener", "LoggingListener", "EventRecorder"]
