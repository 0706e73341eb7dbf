import datetime

import pytest

from core.config import ProjectionConfig
from core.errors import InternalConsistencyError
from engine.aggregator import aggregate
from models.ledger import DayBucket

D = datetime.date


def _buckets():
    return [
        DayBucket(2, D(2024, 1, 3)),
        DayBucket(1, D(2024, 1, 2), amounts=[0], names=["Free sample"]),
        DayBucket(0, D(2024, 1, 1), amounts=[1000, -300], names=["Pay", "Food"]),
    ]


def test_rows_come_out_in_date_order(recorder):
    rows = aggregate(_buckets(), 500, sink=recorder, config=ProjectionConfig())
    assert [r.date for r in rows] == [D(2024, 1, 1), D(2024, 1, 2), D(2024, 1, 3)]
    assert [r.index for r in rows] == [0, 1, 2]


def test_running_totals(recorder):
    first, second, third = aggregate(_buckets(), 500, sink=recorder, config=ProjectionConfig())

    assert first.balance == 1200
    assert first.day_income == 1000
    assert first.day_expenses == -300
    assert first.day_net == 700
    assert first.cumulative_income == 1000
    assert first.cumulative_expenses == -300
    assert first.diff_from_start == 700
    assert first.day_transaction_names == "Pay; Food"
    assert first.names == ("Pay", "Food")

    # zero counts as income
    assert second.day_income == 0
    assert second.day_expenses == 0
    assert second.balance == 1200
    assert second.day_transaction_names == "Free sample"

    assert third.balance == 1200
    assert third.cumulative_income == 1000
    assert third.cumulative_expenses == -300
    assert third.day_transaction_names == ""
    assert third.names == ()


def test_custom_delimiter(recorder):
    rows = aggregate(_buckets(), 0, sink=recorder, config=ProjectionConfig(names_delimiter=" | "))
    assert rows[0].day_transaction_names == "Pay | Food"


def test_mismatched_bucket_fails_with_partial_rows(recorder):
    buckets = [
        DayBucket(0, D(2024, 1, 1), amounts=[100], names=["ok"]),
        DayBucket(1, D(2024, 1, 2), amounts=[100, 200], names=["one"]),
    ]
    with pytest.raises(InternalConsistencyError) as exc_info:
        aggregate(buckets, 0, sink=recorder, config=ProjectionConfig())
    assert exc_info.value.day == D(2024, 1, 2)
    assert [r.date for r in exc_info.value.partial] == [D(2024, 1, 1)]


def test_progress_statuses(recorder):
    aggregate(_buckets(), 0, sink=recorder, config=ProjectionConfig(progress_every=2))
    assert recorder.statuses == [
        "calculating... [0/3]",
        "calculating... [1/3]",
        "calculating... [3/3]",
        "done [3/3]",
    ]
