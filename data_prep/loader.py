"""
Build TransactionDefinition lists from persisted records (dicts or CSV rows).

Records use the persisted field names (``amount``, ``rrule``, ``startsYear`` ...).
A zero year/month/day means "unset" and becomes ``None``. A non-empty
``rrule`` makes the definition explicit; otherwise the simplified fields apply.
"""

from __future__ import annotations

import datetime
import re
import uuid
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from core.logging_setup import get_logger
from core.utils import normalized_date, parse_dollar_amount
from models.transaction import Explicit, Frequency, Simple, TransactionDefinition

logger = get_logger("finplan.data_prep.loader")

_INTEGER = re.compile(r"^[+-]?\d+$")
_WEEKDAY_SPLIT = re.compile(r"[;,\s\[\]]+")

_COLUMN_ALIASES: Dict[str, str] = {
    "ID": "id",
    "Amount": "amount",
    "Active": "active",
    "Name": "name",
    "Note": "note",
    "RRule": "rrule",
    "Frequency": "frequency",
    "Interval": "interval",
    "Weekdays": "weekdays",
    "starts_year": "startsYear",
    "starts_month": "startsMonth",
    "starts_day": "startsDay",
    "ends_year": "endsYear",
    "ends_month": "endsMonth",
    "ends_day": "endsDay",
}


class TransactionRecord(BaseModel):
    """One persisted transaction definition, validated."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    amount: int = 0
    active: bool = True
    name: str = ""
    note: str = ""
    rrule: str = ""
    frequency: str = ""
    interval: int = 1
    weekdays: List[int] = Field(default_factory=list)
    starts_year: int = Field(0, alias="startsYear")
    starts_month: int = Field(0, alias="startsMonth")
    starts_day: int = Field(0, alias="startsDay")
    ends_year: int = Field(0, alias="endsYear")
    ends_month: int = Field(0, alias="endsMonth")
    ends_day: int = Field(0, alias="endsDay")

    @field_validator("id", mode="before")
    @classmethod
    def _id_or_new(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return str(uuid.uuid4())
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_cents(cls, value: Any) -> Any:
        # integer text is cents; anything else is read as a dollar string
        if isinstance(value, str):
            text = value.strip()
            if _INTEGER.match(text):
                return int(text)
            return parse_dollar_amount(text)
        return value

    @field_validator("weekdays", mode="before")
    @classmethod
    def _split_weekdays(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [int(p) for p in _WEEKDAY_SPLIT.split(value) if p]
        return value

    @field_validator(
        "interval", "starts_year", "starts_month", "starts_day",
        "ends_year", "ends_month", "ends_day",
        mode="before",
    )
    @classmethod
    def _blank_is_default(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str) and not value.strip():
            return 1 if info.field_name == "interval" else 0
        return value

    def to_definition(self) -> TransactionDefinition:
        if self.rrule.strip():
            recurrence = Explicit(self.rrule.strip())
        else:
            frequency = Frequency.parse(self.frequency)
            if frequency is None and self.frequency.strip():
                logger.warning(
                    "tx %s (%s): unrecognised frequency %r, using a daily cadence",
                    self.name, self.id, self.frequency,
                )
            recurrence = Simple(
                frequency=frequency,
                interval=self.interval,
                weekdays=frozenset(self.weekdays),
                start=self._date("starts", self.starts_year, self.starts_month, self.starts_day),
                end=self._date("ends", self.ends_year, self.ends_month, self.ends_day),
            )
        return TransactionDefinition(
            amount=self.amount,
            name=self.name,
            recurrence=recurrence,
            active=self.active,
            note=self.note,
            id=self.id,
        )

    def _date(self, label: str, year: int, month: int, day: int) -> Optional[datetime.date]:
        if year == 0 and month == 0 and day == 0:
            return None
        if year <= 0:
            logger.warning("tx %s (%s): %s date has no year, treating as unset", self.name, self.id, label)
            return None
        return normalized_date(year, month, day)


def transactions_from_records(records: Iterable[Dict[str, Any]]) -> List[TransactionDefinition]:
    """Validate persisted records and convert them to definitions, preserving order."""
    return [TransactionRecord.model_validate(r).to_definition() for r in records]


def canonicalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with common column name variants mapped to persisted field names."""
    return df.rename(columns={c: _COLUMN_ALIASES.get(c, c) for c in df.columns})


def load_transactions_csv(path: str) -> List[TransactionDefinition]:
    """
    Load transaction definitions from a CSV with one row per transaction.
    Every cell is read as text; blank cells take the field default.
    """
    raw = pd.read_csv(path, dtype=str, keep_default_na=False)
    df = canonicalize_columns(raw)
    records = [
        {k: v for k, v in row.items() if not (isinstance(v, str) and v == "")}
        for row in df.to_dict(orient="records")
    ]
    return transactions_from_records(records)
