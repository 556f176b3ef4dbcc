"""Style rules: parse a flat key -> color mapping and resolve values against it.

Keys containing ``-`` are interval rules written ``"min-max"`` (both bounds
inclusive, either bound may be negative or use an exponent, e.g. ``"-5--1"``
or ``"0-1e3"``). Every other key is an exact-match rule, so a category name
containing ``-`` cannot be used. Interval rules are tried first, in declaration order;
the first one containing the value wins, so a boundary value shared by two
adjacent intervals belongs to the earlier one.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from .errors import StyleConfigError
from .models import ExactRule, IntervalRule, SegmentStyle, StyleRuleSet

INTERVAL_SEPARATOR = "-"
DEFAULT_FALLBACK_COLOR = "grey"
DEFAULT_WEIGHT = 4

_NUMBER = r"\s*(-?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*"
_INTERVAL_KEY = re.compile(rf"^{_NUMBER}-{_NUMBER}$")


def parse_style_config(
    config: Mapping[str, str],
    fallback: str = DEFAULT_FALLBACK_COLOR,
) -> StyleRuleSet:
    """Partition a flat style mapping into interval and exact rules."""
    intervals: list[IntervalRule] = []
    exact: dict[str, ExactRule] = {}

    for key, color in config.items():
        key = str(key)
        if INTERVAL_SEPARATOR in key:
            match = _INTERVAL_KEY.match(key)
            if match is None:
                raise StyleConfigError(
                    f"Cannot parse interval style key {key!r}; expected 'min-max'. "
                    "Keys containing '-' are always intervals, so hyphenated category names "
                    "cannot be exact keys."
                )
            intervals.append(IntervalRule(min=float(match.group(1)), max=float(match.group(2)), color=color))
        else:
            exact[key] = ExactRule(key=key, color=color)

    return StyleRuleSet(intervals=intervals, exact=exact, fallback=fallback)


def resolve_style(value: Any, rules: StyleRuleSet) -> str:
    """Return the color for ``value``; unmatched values get ``rules.fallback``."""
    number = _as_number(value)
    if number is not None:
        for rule in rules.intervals:
            if rule.min <= number <= rule.max:
                return rule.color

    rule = rules.exact.get(_exact_key(value))
    if rule is not None:
        return rule.color
    return rules.fallback


def style_for(value: Any, rules: StyleRuleSet, weight: int = DEFAULT_WEIGHT) -> SegmentStyle:
    return SegmentStyle(color=resolve_style(value, rules), weight=weight)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def _exact_key(value: Any) -> str:
    # 25.0 must find the "25" key
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
