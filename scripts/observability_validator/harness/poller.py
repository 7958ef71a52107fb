"""
Poll Scheduler
==============

Repeats (read -> evaluate) cycles on a fixed interval until the predicate
reaches a terminal verdict or the deadline runs out.
"""

import time
from typing import Any, Callable

from ..logging import log_debug
from .predicates import Predicate
from .verdict import Observation, ObservationError, Outcome, PollSpec, Verdict

Reader = Callable[[], Any]


class Poller:
    """Blocking poller.

    ``clock`` and ``sleep`` are injectable so the timing behaviour can be
    driven deterministically.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.clock = clock
        self.sleep = sleep

    def observe(self, reader: Reader, predicate: Predicate):
        """Run one read/evaluate cycle.

        Unclassified reader exceptions are transient: the verdict is pending
        and the predicate is not consulted.
        """
        try:
            observation = Observation(data=reader())
        except ObservationError as e:
            observation = Observation.from_error(e)
        except Exception as e:
            observation = Observation.from_error(e)
            return observation, Verdict.pending(f"read failed: {observation.error}")
        return observation, predicate.evaluate(observation)

    def poll(self, reader: Reader, predicate: Predicate, spec: PollSpec) -> Outcome:
        """Poll until ``predicate`` is satisfied or failed, or ``spec.deadline`` passes.

        Args:
            reader: Zero-argument callable fetching the current state
            predicate: Predicate evaluated against each observation
            spec: Interval and deadline

        Returns:
            Outcome with a SATISFIED or FAILED verdict
        """
        t0 = self.clock()
        attempts = 0

        while True:
            attempts += 1
            observation, verdict = self.observe(reader, predicate)
            elapsed = self.clock() - t0
            log_debug(f"    [{elapsed:5.1f}s] attempt {attempts}: {verdict}")

            if verdict.is_terminal:
                return Outcome(
                    verdict=verdict,
                    last_observation=observation,
                    attempts=attempts,
                    elapsed=elapsed,
                )

            if elapsed >= spec.deadline:
                return Outcome.deadline_exceeded(verdict, observation, attempts, elapsed)

            remaining = spec.deadline - elapsed
            if spec.interval > remaining:
                # Next attempt would land past the deadline.
                self.sleep(remaining)
                return Outcome.deadline_exceeded(
                    verdict, observation, attempts, self.clock() - t0
                )

            self.sleep(spec.interval)

