"""Resolve attribute records into the distance ranges of one line."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .models import AttributeRecord, Range

# Value given to a line that has no attribute records at all
NO_DATA_VALUE = 0


def group_records(records: Iterable[AttributeRecord]) -> dict[Any, list[AttributeRecord]]:
    """Index records by line id, keeping input order within each id."""
    grouped: dict[Any, list[AttributeRecord]] = {}
    for record in records:
        grouped.setdefault(record.id, []).append(record)
    return grouped


def ranges_for_line(
    grouped: dict[Any, list[AttributeRecord]],
    line_id: Any,
    length: float,
) -> list[Range]:
    """Build the ranges for ``line_id`` from an id-indexed record mapping.

    Records are used in the order supplied, without sorting or de-overlapping.
    Only the gap after the last record is filled (with the last value); gaps
    before the first record or between records stay uncovered.
    """
    ranges = [Range(start=r.start, end=r.end, value=r.value) for r in grouped.get(line_id, [])]

    if not ranges:
        return [Range(start=0.0, end=length, value=NO_DATA_VALUE)]

    last = ranges[-1]
    if last.end < length:
        ranges.append(Range(start=last.end, end=length, value=last.value))
    return ranges


def resolve_ranges(
    records: Iterable[AttributeRecord],
    line_id: Any,
    length: float,
) -> list[Range]:
    """Select the records for ``line_id`` and resolve them into ranges."""
    return ranges_for_line({line_id: [r for r in records if r.id == line_id]}, line_id, length)
