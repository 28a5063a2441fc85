from __future__ import annotations

"""Per-game scoring of raw stat events.

Events arrive either as mappings with `stat_type` / `value` keys (DB rows) or as
`(stat_type, value)` pairs. Inputs are never mutated.
"""

import math
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from .tables import grade_value, is_count_stat, stat_weight
from .types import coerce_float


def round_half_up(value: float, decimals: int = 1) -> float:
    """Round half toward +infinity (13.25 -> 13.3, -0.25 -> -0.2)."""
    factor = 10 ** int(decimals)
    return math.floor(float(value) * factor + 0.5) / factor


def iter_events(events: Iterable[Any]) -> Iterator[Tuple[str, Optional[float]]]:
    for ev in events or ():
        if isinstance(ev, dict) or hasattr(ev, "keys"):
            stat_type = ev["stat_type"]
            value = ev["value"] if "value" in ev.keys() else None
        else:
            stat_type, value = ev
        yield str(stat_type), (None if value is None else coerce_float(value, 0.0))


def _contribution(stat_type: str, value: Optional[float]) -> float:
    if is_count_stat(stat_type):
        units = 1.0
    else:
        # missing / zero magnitude counts as a single unit
        units = value if value else 1.0
    return stat_weight(stat_type) * units


def calculate_stat_score(events: Iterable[Any]) -> float:
    """Weighted score of one player's events in one game, rounded half-up to 0.1."""
    # fsum: exact summation, so the result does not depend on event order
    total = math.fsum(_contribution(t, v) for t, v in iter_events(events))
    return round_half_up(total, 1)


def aggregate_stats(events: Iterable[Any]) -> Dict[str, float]:
    """Display totals: count types +1 per event, magnitude types +value."""
    parts: Dict[str, list] = {}
    for stat_type, value in iter_events(events):
        parts.setdefault(stat_type, []).append(1.0 if is_count_stat(stat_type) else (value or 0.0))
    out: Dict[str, float] = {}
    for stat_type, values in parts.items():
        total = math.fsum(values)
        out[stat_type] = int(total) if float(total).is_integer() else total
    return out


def grade_to_numeric(grade: Any) -> int:
    """Display value of a letter grade; unknown or missing grades show as 0."""
    return grade_value(grade) or 0


def grade_value_for_average(grade: Any) -> Optional[int]:
    """Numeric grade for averaging; None for unknown or missing grades."""
    return grade_value(grade)
