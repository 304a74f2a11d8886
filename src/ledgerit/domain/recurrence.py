"""Expansion of recurring templates into monthly occurrences.

A recurring template never becomes a ledger entry itself. For a date window,
each active template yields one virtual occurrence per month; an occurrence
is dropped once a real transaction linked to the template covers it. The
two kinds are modeled as a tagged union::

    Occurrence = MaterializedOccurrence | VirtualOccurrence
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Protocol, Union

from ledgerit.domain.calendar_math import iter_months, occurrence_date, same_month
from ledgerit.domain.entities import (
    RecurringTransaction,
    ShortMonthPolicy,
    Transaction,
)
from ledgerit.domain.errors import ValidationError


class LinkedEntry(Protocol):
    """Anything that can cover a virtual occurrence."""

    recurring_transaction_id: Optional[int]
    date: date
    effectuated_date: Optional[date]


@dataclass(frozen=True)
class MaterializedOccurrence:
    """A persisted transaction."""

    transaction: Transaction

    @property
    def date(self) -> date:
        return self.transaction.date


@dataclass(frozen=True)
class VirtualOccurrence:
    """A not-yet-materialized occurrence of a recurring template."""

    template: RecurringTransaction
    date: date


Occurrence = Union[MaterializedOccurrence, VirtualOccurrence]


def before_series_start(template: RecurringTransaction, when: date) -> bool:
    """Check whether ``when`` falls in a month before the series began."""
    return (when.year, when.month) < (template.start_date.year, template.start_date.month)


def expand_recurring(
    templates: Iterable[RecurringTransaction],
    start_date: date,
    end_date: date,
    policy: ShortMonthPolicy = ShortMonthPolicy.CLAMP,
) -> list[VirtualOccurrence]:
    """Generate virtual occurrences of templates within [start_date, end_date].

    Archived templates generate nothing. One occurrence is produced per
    calendar month at the template's day, subject to the short-month policy,
    and only when that date falls inside the window. Months before the
    template's start month produce nothing.

    Raises:
        ValidationError: If start_date is after end_date
    """
    if start_date > end_date:
        raise ValidationError(
            f"start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
        )

    occurrences: list[VirtualOccurrence] = []
    months = list(iter_months(start_date, end_date))
    for template in templates:
        if template.archived:
            continue
        for year, month in months:
            when = occurrence_date(year, month, template.day, policy)
            if when is None or when < start_date or when > end_date:
                continue
            if before_series_start(template, when):
                continue
            occurrences.append(VirtualOccurrence(template=template, date=when))
    return occurrences


def is_covered(occurrence: VirtualOccurrence, entries: Iterable[LinkedEntry]) -> bool:
    """Check whether a real entry already stands for a virtual occurrence.

    An entry covers the occurrence when it is linked to the same template and
    either its scheduled date is in the same month or it was effectuated on
    the occurrence date. Callers pass only non-archived entries.
    """
    for entry in entries:
        if entry.recurring_transaction_id != occurrence.template.id:
            continue
        if same_month(entry.date, occurrence.date):
            return True
        if entry.effectuated_date is not None and entry.effectuated_date == occurrence.date:
            return True
    return False


def find_covering(
    recurring_transaction_id: int,
    occurrence_on: date,
    entries: Iterable[Transaction],
) -> Optional[Transaction]:
    """Return the real transaction covering an occurrence, if any."""
    for entry in entries:
        if entry.archived or entry.recurring_transaction_id != recurring_transaction_id:
            continue
        if same_month(entry.date, occurrence_on) or entry.effectuated_date == occurrence_on:
            return entry
    return None


def _sort_key(occurrence: Occurrence) -> tuple[date, int, int]:
    if isinstance(occurrence, MaterializedOccurrence):
        return (occurrence.date, 1, occurrence.transaction.id)
    return (occurrence.date, 0, occurrence.template.id)


def resolve_occurrences(
    occurrences: Iterable[Occurrence],
    covering: Iterable[LinkedEntry] = (),
) -> list[Occurrence]:
    """Merge materialized and virtual occurrences.

    Virtual occurrences covered by a materialized one (or by any entry in
    ``covering``, for rows outside the window) are dropped. The result is
    sorted by date descending, materialized before virtual on the same date.
    """
    materialized: list[MaterializedOccurrence] = []
    virtual: list[VirtualOccurrence] = []
    for occurrence in occurrences:
        if isinstance(occurrence, MaterializedOccurrence):
            materialized.append(occurrence)
        else:
            virtual.append(occurrence)

    entries: list[LinkedEntry] = [m.transaction for m in materialized]
    entries.extend(covering)

    result: list[Occurrence] = list(materialized)
    result.extend(v for v in virtual if not is_covered(v, entries))
    result.sort(key=_sort_key, reverse=True)
    return result
