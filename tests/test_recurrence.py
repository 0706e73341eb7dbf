import datetime

import pytest

from core.config import ProjectionConfig
from core.errors import RuleParseError
from engine.calendar import index_dates
from engine.recurrence import occurrences, resolve_recurrences
from models.transaction import Explicit, Frequency, Simple, TransactionDefinition

D = datetime.date
JAN_1 = D(2024, 1, 1)
DEC_31 = D(2024, 12, 31)


def _tx(recurrence, amount=-100, name="tx", tx_id="tx-1", active=True):
    return TransactionDefinition(amount=amount, name=name, recurrence=recurrence, active=active, id=tx_id)


class TestSimpleOccurrences:
    def test_monthly_within_window(self, monthly_rent):
        days = occurrences(monthly_rent, JAN_1, DEC_31)
        assert days == [D(2024, m, 1) for m in range(1, 13)]

    def test_weekly_monday_filter(self, monday_paycheck):
        days = occurrences(monday_paycheck, D(2024, 1, 1), D(2024, 1, 28))
        assert days == [D(2024, 1, 1), D(2024, 1, 8), D(2024, 1, 15), D(2024, 1, 22)]

    def test_weekly_filter_when_window_starts_midweek(self, monday_paycheck):
        days = occurrences(monday_paycheck, D(2024, 1, 3), D(2024, 1, 30))
        assert days == [D(2024, 1, 8), D(2024, 1, 15), D(2024, 1, 22), D(2024, 1, 29)]

    def test_weekly_multiple_weekdays_every_other_week(self):
        tx = _tx(Simple(Frequency.WEEKLY, interval=2, weekdays=frozenset({0, 4}), start=D(2024, 1, 1)))
        days = occurrences(tx, JAN_1, D(2024, 1, 31))
        assert days == [D(2024, 1, 1), D(2024, 1, 5), D(2024, 1, 15), D(2024, 1, 19), D(2024, 1, 29)]

    def test_monthly_weekday_filter_keeps_matching_days_only(self):
        tx = _tx(Simple(Frequency.MONTHLY, weekdays=frozenset({0}), start=JAN_1))
        assert occurrences(tx, JAN_1, DEC_31) == [D(2024, 1, 1), D(2024, 4, 1), D(2024, 7, 1)]

    def test_monthly_interval(self):
        tx = _tx(Simple(Frequency.MONTHLY, interval=2, start=D(2024, 1, 10)))
        assert occurrences(tx, JAN_1, DEC_31) == [D(2024, m, 10) for m in (1, 3, 5, 7, 9, 11)]

    def test_yearly_leap_day(self):
        tx = _tx(Simple(Frequency.YEARLY, start=D(2020, 2, 29)))
        days = occurrences(tx, D(2020, 1, 1), D(2028, 12, 31))
        assert days == [D(2020, 2, 29), D(2024, 2, 29), D(2028, 2, 29)]

    def test_no_frequency_is_daily(self):
        tx = _tx(Simple(frequency=None))
        days = occurrences(tx, JAN_1, D(2024, 1, 7))
        assert days == [D(2024, 1, d) for d in range(1, 8)]

    def test_daily_weekday_filter(self):
        tx = _tx(Simple(frequency=None, weekdays=frozenset({5, 6})))
        days = occurrences(tx, JAN_1, D(2024, 1, 14))
        assert days == [D(2024, 1, 6), D(2024, 1, 7), D(2024, 1, 13), D(2024, 1, 14)]

    def test_out_of_range_weekdays_are_ignored(self):
        tx = _tx(Simple(frequency=None, weekdays=frozenset({9})))
        assert len(occurrences(tx, JAN_1, D(2024, 1, 7))) == 7

    def test_zero_interval_treated_as_one(self):
        tx = _tx(Simple(Frequency.MONTHLY, interval=0, start=JAN_1))
        assert len(occurrences(tx, JAN_1, DEC_31)) == 12

    def test_start_before_window(self):
        tx = _tx(Simple(Frequency.MONTHLY, start=D(2023, 11, 15)))
        days = occurrences(tx, JAN_1, D(2024, 3, 31))
        assert days == [D(2024, 1, 15), D(2024, 2, 15), D(2024, 3, 15)]

    def test_end_inside_window(self):
        tx = _tx(Simple(Frequency.MONTHLY, start=D(2024, 1, 15), end=D(2024, 2, 20)))
        assert occurrences(tx, JAN_1, DEC_31) == [D(2024, 1, 15), D(2024, 2, 15)]

    def test_end_after_window_is_clamped(self):
        tx = _tx(Simple(Frequency.MONTHLY, start=D(2024, 1, 15), end=D(2030, 1, 1)))
        assert occurrences(tx, JAN_1, D(2024, 2, 29)) == [D(2024, 1, 15), D(2024, 2, 15)]

    def test_ended_before_window(self):
        tx = _tx(Simple(Frequency.MONTHLY, start=D(2023, 1, 15), end=D(2023, 12, 15)))
        assert occurrences(tx, JAN_1, DEC_31) == []


class TestExplicitOccurrences:
    def test_rule_expression(self):
        tx = _tx(Explicit("FREQ=MONTHLY;BYMONTHDAY=15"))
        days = occurrences(tx, JAN_1, D(2024, 3, 31))
        assert days == [D(2024, 1, 15), D(2024, 2, 15), D(2024, 3, 15)]

    def test_rule_with_dtstart_and_time_of_day(self):
        tx = _tx(Explicit("DTSTART:20240101T090000\nRRULE:FREQ=DAILY;COUNT=3"))
        days = occurrences(tx, JAN_1, D(2024, 1, 3))
        assert days == [D(2024, 1, 1), D(2024, 1, 2), D(2024, 1, 3)]

    def test_only_window_dates_are_returned(self):
        tx = _tx(Explicit("DTSTART:20231201T000000\nRRULE:FREQ=WEEKLY;BYDAY=FR"))
        days = occurrences(tx, D(2024, 1, 1), D(2024, 1, 14))
        assert days == [D(2024, 1, 5), D(2024, 1, 12)]

    @pytest.mark.parametrize("expression", ["FREQ=SOMETIMES", "not a rule", ""])
    def test_malformed_rule_names_the_transaction(self, expression):
        tx = _tx(Explicit(expression), name="Gym", tx_id="gym-1")
        with pytest.raises(RuleParseError) as exc_info:
            occurrences(tx, JAN_1, DEC_31)
        assert exc_info.value.transaction_id == "gym-1"
        assert exc_info.value.transaction_name == "Gym"


class TestResolveRecurrences:
    def test_fills_buckets_in_transaction_order(self, recorder):
        first = _tx(Simple(frequency=None), amount=-100, name="Coffee", tx_id="a")
        second = _tx(Simple(frequency=None), amount=2500, name="Tips", tx_id="b")
        buckets = index_dates(JAN_1, D(2024, 1, 2))
        resolve_recurrences([first, second], buckets, JAN_1, D(2024, 1, 2), sink=recorder, config=ProjectionConfig())
        for bucket in buckets.values():
            assert bucket.amounts == [-100, 2500]
            assert bucket.names == ["Coffee", "Tips"]

    def test_inactive_transactions_are_skipped(self, recorder):
        bad = _tx(Explicit("FREQ=SOMETIMES"), active=False)
        buckets = index_dates(JAN_1, D(2024, 1, 5))
        resolve_recurrences([bad], buckets, JAN_1, D(2024, 1, 5), sink=recorder, config=ProjectionConfig())
        assert all(not b.amounts for b in buckets.values())

    def test_failure_carries_partial_buckets(self, recorder):
        good = _tx(Simple(frequency=None), name="Coffee", tx_id="a")
        bad = _tx(Explicit("FREQ=SOMETIMES"), name="Broken", tx_id="b")
        buckets = index_dates(JAN_1, D(2024, 1, 3))
        with pytest.raises(RuleParseError) as exc_info:
            resolve_recurrences([good, bad], buckets, JAN_1, D(2024, 1, 3), sink=recorder, config=ProjectionConfig())
        assert exc_info.value.transaction_id == "b"
        assert exc_info.value.partial is buckets
        assert buckets[JAN_1].names == ["Coffee"]

    def test_progress_is_coarse(self, recorder):
        txs = [_tx(Simple(frequency=None), tx_id=str(i)) for i in range(5)]
        buckets = index_dates(JAN_1, JAN_1)
        resolve_recurrences(txs, buckets, JAN_1, JAN_1, sink=recorder, config=ProjectionConfig(progress_every=2))
        assert recorder.statuses == [
            "recurrences... [0/5]",
            "recurrences... [1/5]",
            "recurrences... [3/5]",
            "recurrences... [5/5]",
        ]
