"""Shared fixtures for the engine tests."""

from __future__ import annotations

import datetime
from typing import List

import pytest

from core.config import ProjectionWindow
from models.transaction import Frequency, Simple, TransactionDefinition


class StatusRecorder:
    """Progress sink that keeps every status it receives."""

    def __init__(self) -> None:
        self.statuses: List[str] = []

    def __call__(self, status: str) -> None:
        self.statuses.append(status)


@pytest.fixture
def recorder() -> StatusRecorder:
    return StatusRecorder()


@pytest.fixture
def year_2024() -> ProjectionWindow:
    return ProjectionWindow(datetime.date(2024, 1, 1), datetime.date(2024, 12, 31))


@pytest.fixture
def monthly_rent() -> TransactionDefinition:
    return TransactionDefinition(
        id="rent",
        amount=-5000,
        name="Rent",
        recurrence=Simple(
            frequency=Frequency.MONTHLY,
            interval=1,
            start=datetime.date(2024, 1, 1),
            end=datetime.date(2024, 12, 31),
        ),
    )


@pytest.fixture
def monday_paycheck() -> TransactionDefinition:
    return TransactionDefinition(
        id="pay",
        amount=20000,
        name="Paycheck",
        recurrence=Simple(frequency=Frequency.WEEKLY, interval=1, weekdays=frozenset({0})),
    )
