"""
Quality checks for transaction definitions before they enter the engine.

Catches problems early:
- Explicit rules the evaluator cannot parse
- Intervals below one and weekdays outside Monday(0)..Sunday(6)
- Definitions silently falling back to a daily cadence
- Duplicate ids and start dates after end dates
"""

from __future__ import annotations

import datetime
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Sequence

from dateutil import rrule

from models.transaction import Explicit, Simple, TransactionDefinition


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a set of transactions."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def _label(tx: TransactionDefinition) -> str:
    return f"{tx.name!r} ({tx.id})"


def validate_transactions(transactions: Sequence[TransactionDefinition]) -> ValidationResult:
    """
    Run all checks. Errors would make a projection fail or misbehave;
    warnings flag definitions that run but probably not as intended.
    """
    result = ValidationResult()

    dupes = [i for i, n in Counter(tx.id for tx in transactions).items() if n > 1]
    if dupes:
        result.warnings.append(f"{len(dupes)} duplicate transaction ids found: {sorted(dupes)}")

    for tx in transactions:
        rec = tx.recurrence

        if isinstance(rec, Explicit):
            try:
                rrule.rrulestr(rec.expression, dtstart=datetime.datetime(2000, 1, 1), forceset=True, ignoretz=True)
            except (ValueError, TypeError) as exc:
                result.errors.append(f"{_label(tx)}: malformed rrule {rec.expression!r}: {exc}")
            continue

        if not isinstance(rec, Simple):
            result.errors.append(f"{_label(tx)}: unsupported recurrence {type(rec).__name__}")
            continue

        if rec.interval < 1:
            result.errors.append(f"{_label(tx)}: interval must be at least 1, got {rec.interval}")

        bad_days = sorted(d for d in rec.weekdays if not 0 <= d <= 6)
        if bad_days:
            result.errors.append(f"{_label(tx)}: weekdays outside 0-6: {bad_days}")

        if rec.frequency is None:
            result.warnings.append(f"{_label(tx)}: no frequency set, defaults to a daily cadence")

        if rec.start is not None and rec.end is not None and rec.start > rec.end:
            result.warnings.append(
                f"{_label(tx)}: starts {rec.start} after it ends {rec.end}; it will never occur"
            )

    return result
