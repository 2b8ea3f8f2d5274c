"""Unit tests for normalized record models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from suitrail.data.models import Checkpoint, Event, ObjectHistory, ObjectState, Summary


class TestCheckpoint:
    def test_zero_values(self):
        checkpoint = Checkpoint()
        assert checkpoint.digest == ""
        assert checkpoint.sequence_number == 0
        assert checkpoint.transaction_digests == []
        assert checkpoint.transaction_count == 0

    def test_to_row(self):
        checkpoint = Checkpoint(
            digest="D",
            sequence_number=10,
            timestamp_ms=1000,
            transaction_digests=["a", "b"],
            network_total_transactions=99,
            event_root="R",
        )
        assert checkpoint.to_row() == {
            "Digest": "D",
            "SequenceNumber": 10,
            "TimestampMs": 1000,
            "TransactionCount": 2,
            "NetworkTotalTransactions": 99,
            "EventRoot": "R",
        }

    def test_dump_by_alias(self):
        dumped = Checkpoint(sequence_number=3).model_dump(by_alias=True)
        assert dumped["SequenceNumber"] == 3
        assert "TransactionDigests" in dumped

    def test_frozen(self):
        checkpoint = Checkpoint(sequence_number=1)
        with pytest.raises(PydanticValidationError):
            checkpoint.sequence_number = 2


class TestObjectState:
    def test_alias_and_with_timestamp(self):
        state = ObjectState(version="5", previous_transaction="tx")
        updated = state.with_timestamp(123)
        assert updated.timestamp == 123
        assert state.timestamp == 0
        assert updated.model_dump(by_alias=True)["previousTransaction"] == "tx"

    def test_owner_may_be_string(self):
        assert ObjectState(owner="Immutable").owner == "Immutable"


def test_event_column_names_keep_order():
    event = Event(raw={"id": {}, "packageId": "p", "sender": "s"})
    assert event.column_names() == ["id", "packageId", "sender"]


def test_object_history_from_summary():
    states = [ObjectState(version="1"), ObjectState(version="2", type="T")]
    summary = Summary(record_count=2, change_count=1, distinct_owners=1, first_seen=5, last_seen=9)
    history = ObjectHistory.from_summary("0x1", states, summary)
    assert history.num_changes == 1
    assert history.current.type == "T"
    dumped = history.model_dump(by_alias=True)
    assert dumped["firstSeen"] == 5
    assert dumped["lastSeen"] == 9
    assert dumped["numOwners"] == 1


def test_summary_has_timestamps():
    assert not Summary().has_timestamps
    assert Summary(first_seen=1, last_seen=2).has_timestamps
