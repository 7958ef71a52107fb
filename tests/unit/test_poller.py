"""
Poll scheduler tests.

Timing is driven by a fake clock so attempt counts and elapsed times are
exact.
"""

import math

import pytest

from observability_validator.harness import (
    DEADLINE_EXCEEDED,
    ErrorCode,
    MetricAbsent,
    ObservationError,
    PodsRunning,
    PollSpec,
    Status,
    Verdict,
    predicate,
)

from utils import ScriptedReader, make_pod


ALWAYS_PENDING = predicate("never true", lambda data: False)
ALWAYS_SATISFIED = predicate("always true", lambda data: True)


@pytest.mark.unit
class TestTermination:
    """Tests for when the poller stops."""

    def test_satisfied_on_first_observation(self, poller):
        """A predicate satisfied immediately returns after one attempt."""
        spec = PollSpec(interval=1, deadline=5)
        outcome = poller.poll(ScriptedReader(["ok"]), ALWAYS_SATISFIED, spec)

        assert outcome.passed
        assert outcome.attempts == 1
        assert outcome.elapsed < spec.interval
        assert not outcome.timed_out

    def test_pending_then_satisfied(self, poller, fake_clock):
        """Pending for three observations then satisfied: four attempts, ~3s."""
        reader = ScriptedReader([[], [], [], [make_pod("mco-0")]])
        outcome = poller.poll(reader, PodsRunning(count=1), PollSpec(interval=1, deadline=5))

        assert outcome.verdict.status is Status.SATISFIED
        assert outcome.attempts == 4
        assert outcome.elapsed == pytest.approx(3.0)
        assert reader.calls == 4

    def test_failed_verdict_stops_immediately(self, poller, fake_clock):
        """A FAILED verdict ends polling without waiting out the deadline."""
        reader = ScriptedReader([ObservationError(ErrorCode.INVALID_QUERY, "bad_data")])
        outcome = poller.poll(reader, MetricAbsent(), PollSpec(interval=5, deadline=300))

        assert outcome.verdict.status is Status.FAILED
        assert outcome.attempts == 1
        assert not outcome.timed_out
        assert fake_clock.sleeps == []

    def test_absence_confirmed_by_no_data_signal(self, poller):
        """A classified no-data read satisfies an absence predicate on the first call."""
        reader = ScriptedReader([ObservationError(ErrorCode.NO_DATA, "no matching series")])
        outcome = poller.poll(reader, MetricAbsent(), PollSpec(interval=5, deadline=600))

        assert outcome.passed
        assert outcome.attempts == 1


@pytest.mark.unit
class TestDeadline:
    """Tests for deadline exhaustion."""

    @pytest.mark.parametrize("interval,deadline", [(1, 5), (5, 300), (2, 7), (3, 3)])
    def test_never_satisfied_times_out(self, poller, interval, deadline):
        """A predicate that never leaves pending times out after the full budget."""
        outcome = poller.poll(ScriptedReader([None]), ALWAYS_PENDING,
                              PollSpec(interval=interval, deadline=deadline))

        assert outcome.timed_out
        assert outcome.verdict.status is Status.FAILED
        assert outcome.reason == DEADLINE_EXCEEDED
        assert outcome.elapsed >= deadline
        assert abs(outcome.attempts - (math.floor(deadline / interval) + 1)) <= 1

    def test_long_deadline_attempt_count(self, poller):
        """interval=5s, deadline=300s: roughly 60 attempts over 300s."""
        outcome = poller.poll(ScriptedReader([None]), ALWAYS_PENDING,
                              PollSpec(interval=5, deadline=300))

        assert outcome.reason == DEADLINE_EXCEEDED
        assert 59 <= outcome.attempts <= 61
        assert outcome.elapsed == pytest.approx(300.0)

    @pytest.mark.parametrize("interval,deadline", [(10, 5), (60, 1), (2, 1.5)])
    def test_interval_longer_than_deadline_makes_one_attempt(self, poller, interval, deadline):
        """deadline < interval degenerates to exactly one evaluation."""
        reader = ScriptedReader([None])
        outcome = poller.poll(reader, ALWAYS_PENDING, PollSpec(interval=interval, deadline=deadline))

        assert reader.calls == 1
        assert outcome.attempts == 1
        assert outcome.timed_out
        assert outcome.elapsed >= deadline

    def test_read_latency_counts_against_deadline(self, poller, fake_clock):
        """Time spent reading is part of the elapsed budget."""
        reader = ScriptedReader([None], clock=fake_clock, latency=0.1)
        outcome = poller.poll(reader, ALWAYS_PENDING, PollSpec(interval=1, deadline=5))

        assert outcome.timed_out
        assert outcome.attempts == 5
        assert outcome.elapsed == pytest.approx(5.0)

    def test_sleeps_use_interval(self, poller, fake_clock):
        """Between attempts the poller sleeps exactly the interval."""
        poller.poll(ScriptedReader([None]), ALWAYS_PENDING, PollSpec(interval=2, deadline=6))

        assert fake_clock.sleeps == [2, 2, 2]

    def test_timeout_keeps_last_pending_reason(self, poller):
        """The last pending state is kept next to the exact timeout reason."""
        reader = ScriptedReader([[make_pod("collector-0", phase="Pending")]])
        outcome = poller.poll(reader, PodsRunning(), PollSpec(interval=1, deadline=2))

        assert outcome.reason == DEADLINE_EXCEEDED
        assert "collector-0=Pending" in outcome.last_reason
        assert outcome.last_observation.data[0].metadata.name == "collector-0"


@pytest.mark.unit
class TestReaderErrors:
    """Reader failures are transient and never fail a poll early."""

    def test_transport_errors_become_pending(self, poller):
        """A reader that always raises only ends by timing out."""
        reader = ScriptedReader([ConnectionError("connection refused")])
        outcome = poller.poll(reader, ALWAYS_SATISFIED, PollSpec(interval=1, deadline=4))

        assert outcome.timed_out
        assert outcome.attempts == 5
        assert outcome.last_observation.error == "connection refused"
        assert outcome.last_observation.code is None

    def test_transport_errors_skip_predicate(self, poller):
        """An unclassified error is not handed to the predicate."""
        seen = []

        def record(data):
            seen.append(data)
            return Verdict.failed("should not be called")

        reader = ScriptedReader([RuntimeError("boom")])
        outcome = poller.poll(reader, predicate("recording", record), PollSpec(interval=1, deadline=2))

        assert seen == []
        assert outcome.timed_out

    def test_recovers_after_transient_errors(self, poller):
        """Errors followed by a good read end in success."""
        reader = ScriptedReader([
            TimeoutError("api timeout"),
            ObservationError(ErrorCode.NOT_FOUND, "mco not found"),
            [make_pod("mco-0")],
        ])
        outcome = poller.poll(reader, PodsRunning(count=1), PollSpec(interval=1, deadline=10))

        assert outcome.passed
        assert outcome.attempts == 3

    def test_exception_without_message_is_tagged(self, poller):
        """Errors with an empty message still produce an error-tagged observation."""
        outcome = poller.poll(ScriptedReader([KeyError()]), ALWAYS_SATISFIED,
                              PollSpec(interval=1, deadline=1))

        assert outcome.last_observation.error
        assert not outcome.last_observation.ok


@pytest.mark.unit
class TestTimeoutReason:
    """A timed-out outcome fails with exactly "deadline exceeded"."""

    def test_reason_is_exact_for_pending_predicate(self, poller):
        outcome = poller.poll(ScriptedReader([None]), ALWAYS_PENDING, PollSpec(interval=1, deadline=3))

        assert outcome.verdict == Verdict.failed("deadline exceeded")
        assert outcome.reason == "deadline exceeded"
        assert outcome.last_reason == "never true not met yet"

    def test_reason_is_exact_for_reader_errors(self, poller):
        reader = ScriptedReader([ConnectionError("connection refused")])
        outcome = poller.poll(reader, ALWAYS_PENDING, PollSpec(interval=1, deadline=2))

        assert outcome.reason == "deadline exceeded"
        assert "connection refused" in outcome.last_reason

    def test_satisfied_outcome_has_no_last_reason(self, poller):
        outcome = poller.poll(ScriptedReader([None]), ALWAYS_SATISFIED, PollSpec(interval=1, deadline=3))

        assert outcome.passed
        assert outcome.last_reason == ""
