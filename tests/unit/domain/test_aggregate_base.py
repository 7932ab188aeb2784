"""Unit tests for the Aggregate base class."""

from dataclasses import dataclass

import pytest

from tally.domain.aggregates.base import Aggregate
from tally.domain.errors import AggregateIdMismatchError
from tally.domain.events import DomainEvent

# pylint: disable=protected-access,magic-value-comparison,too-few-public-methods


@dataclass(frozen=True)
class FakeEvent(DomainEvent):
    """A fake event for testing purposes."""

    fake_aggregate_id: str
    sequence: int

    @property
    def aggregate_id(self) -> str:
        return self.fake_aggregate_id


class FakeAggregate(Aggregate):
    """A fake aggregate for testing the base Aggregate class."""

    AGGREGATE_TYPE = "FakeAggregate"

    def poke(self, target_id: str | None = None) -> FakeEvent:
        """Record a FakeEvent, optionally aimed at another aggregate."""
        target = target_id or self.aggregate_id
        return self._record(lambda seq: FakeEvent(target, seq))


class TestAggregateInitialization:
    """Tests for a freshly created aggregate."""

    @staticmethod
    def test_initializes_with_version_zero() -> None:
        """A newly created aggregate has version zero."""
        assert FakeAggregate("agg-1").version == 0

    @staticmethod
    def test_initializes_with_empty_event_log() -> None:
        """A newly created aggregate has no events."""
        aggregate = FakeAggregate("agg-1")
        assert aggregate.events == ()
        assert aggregate.collect_undispatched() == []

    @staticmethod
    def test_aggregate_id_assignment() -> None:
        """The aggregate ID is assigned correctly."""
        assert FakeAggregate("agg-1").aggregate_id == "agg-1"


class TestAggregateRecording:
    """Tests for the _record gate."""

    @staticmethod
    def test_assigns_increasing_sequence_numbers() -> None:
        """Sequence numbers start at 1 and increase by one."""
        aggregate = FakeAggregate("agg-1")
        first, second = aggregate.poke(), aggregate.poke()
        assert (first.sequence, second.sequence) == (1, 2)
        assert aggregate.events == (first, second)

    @staticmethod
    def test_record_does_not_change_version() -> None:
        """Recording an event leaves the persisted version alone."""
        aggregate = FakeAggregate("agg-1")
        aggregate.poke()
        assert aggregate.version == 0

    @staticmethod
    def test_record_raises_on_id_mismatch() -> None:
        """An event for another aggregate is refused and not recorded."""
        aggregate = FakeAggregate("agg-1")
        with pytest.raises(AggregateIdMismatchError) as e:
            aggregate.poke("agg-2")
        assert e.value.aggregate_id == "agg-1"
        assert e.value.event_aggregate_id == "agg-2"
        assert aggregate.events == ()


class TestCollectUndispatched:
    """Tests for draining the event log."""

    @staticmethod
    def test_returns_each_event_once() -> None:
        """Events are handed out once; later calls only see newer events."""
        aggregate = FakeAggregate("agg-1")
        first = aggregate.poke()
        assert aggregate.collect_undispatched() == [first]
        assert aggregate.collect_undispatched() == []

        second = aggregate.poke()
        assert aggregate.collect_undispatched() == [second]

    @staticmethod
    def test_draining_keeps_the_log() -> None:
        """The log is append-only: draining never removes events."""
        aggregate = FakeAggregate("agg-1")
        aggregate.poke()
        aggregate.poke()
        aggregate.collect_undispatched()
        assert len(aggregate.events) == 2

    @staticmethod
    def test_events_view_cannot_mutate_log() -> None:
        """events is a tuple snapshot."""
        aggregate = FakeAggregate("agg-1")
        aggregate.poke()
        assert isinstance(aggregate.events, tuple)


class TestMarkPersisted:
    """Tests for mark_persisted."""

    @staticmethod
    def test_sets_version() -> None:
        """The repository-assigned version is recorded."""
        aggregate = FakeAggregate("agg-1")
        aggregate.mark_persisted(3)
        assert aggregate.version == 3

    @staticmethod
    def test_rejects_going_backwards() -> None:
        """Versions never decrease."""
        aggregate = FakeAggregate("agg-1")
        aggregate.mark_persisted(3)
        with pytest.raises(ValueError):
            aggregate.mark_persisted(2)
