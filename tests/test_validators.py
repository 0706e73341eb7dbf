import datetime

from data_prep.validators import validate_transactions
from models.transaction import Explicit, Frequency, Simple, TransactionDefinition

D = datetime.date


def test_clean_set_passes(monthly_rent, monday_paycheck):
    result = validate_transactions([monthly_rent, monday_paycheck])
    assert result.is_valid
    assert result.warnings == []
    assert "All checks passed" in result.summary()


def test_malformed_rrule_is_an_error():
    tx = TransactionDefinition(id="x", amount=-1, name="X", recurrence=Explicit("FREQ=SOMETIMES"))
    result = validate_transactions([tx])
    assert not result.is_valid
    assert "malformed rrule" in result.errors[0]


def test_interval_and_weekday_range_errors():
    tx = TransactionDefinition(
        id="x", amount=-1, recurrence=Simple(Frequency.WEEKLY, interval=0, weekdays=frozenset({1, 7}))
    )
    result = validate_transactions([tx])
    assert len(result.errors) == 2
    assert any("interval" in e for e in result.errors)
    assert any("[7]" in e for e in result.errors)


def test_warnings_do_not_invalidate(monthly_rent):
    daily = TransactionDefinition(id="rent", amount=-1, name="Coffee", recurrence=Simple(frequency=None))
    backwards = TransactionDefinition(
        id="b", amount=-1, recurrence=Simple(start=D(2024, 6, 1), end=D(2024, 1, 1))
    )
    result = validate_transactions([monthly_rent, daily, backwards])
    assert result.is_valid
    assert len(result.warnings) == 3
    assert "duplicate" in result.warnings[0]
    assert "WARNINGS (3)" in result.summary()
