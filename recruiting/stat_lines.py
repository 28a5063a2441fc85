from __future__ import annotations

"""Position-shaped stat lines for weekly recruit reports.

Raw events are grouped per stat type into an event count and an integer value sum,
then projected through a per-position field map. Each field is one of:

- ("count", types): sum of event counts over `types`
- ("sum", types):   sum of value sums over `types`
- ("pct", (made, missed)): round(made / (made + missed) * 100), 0 with no attempts
"""

import math
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple

from schema import normalize_position

FieldSpec = Tuple[str, str, Tuple[str, ...]]

_RUSH = ("Rush", "Rush TD")
_REC = ("Reception", "Rec TD")
_TACKLES = ("Tackle Solo", "Tackle Assist")

_RECEIVING: Tuple[FieldSpec, ...] = (
    ("receptions", "count", _REC),
    ("recYds", "sum", _REC),
    ("recTD", "count", ("Rec TD",)),
)
_RUSHING: Tuple[FieldSpec, ...] = (
    ("carries", "count", _RUSH),
    ("rushYds", "sum", _RUSH),
    ("rushTD", "count", ("Rush TD",)),
)
_FUMBLES: FieldSpec = ("fumbles", "count", ("Fumble",))
_LINEMAN: Tuple[FieldSpec, ...] = (
    ("tackles", "count", _TACKLES),
    ("tfl", "count", ("TFL",)),
    ("pbu", "count", ("PBU",)),
    ("sack", "count", ("Sack",)),
    ("ff", "count", ("Forced Fumble",)),
)
_SECONDARY: Tuple[FieldSpec, ...] = (
    ("pbu", "count", ("PBU",)),
    ("tackles", "count", _TACKLES),
    ("interceptions", "count", ("INT",)),
)

POSITION_STAT_FIELDS: Mapping[str, Tuple[FieldSpec, ...]] = MappingProxyType(
    {
        "QB": (
            ("passComp", "count", ("Pass Comp",)),
            ("passAtt", "count", ("Pass Comp", "Pass Inc")),
            ("completionPct", "pct", ("Pass Comp", "Pass Inc")),
            ("passYards", "sum", ("Pass Comp",)),
            ("passTD", "count", ("Pass TD",)),
            ("rushYards", "sum", _RUSH),
            ("rushTD", "count", ("Rush TD",)),
            ("interceptions", "count", ("INT",)),
            _FUMBLES,
        ),
        "RB": _RUSHING + _RECEIVING + (_FUMBLES,),
        "WR": _RECEIVING + _RUSHING + (_FUMBLES,),
        "TE": (
            ("receptions", "count", _REC),
            ("recYds", "sum", _REC),
            ("tds", "count", ("Rec TD", "TD")),
            _FUMBLES,
        ),
        "DL": _LINEMAN,
        "DE": _LINEMAN,
        "LB": (
            ("tackles", "count", _TACKLES),
            ("pbu", "count", ("PBU",)),
            ("ff", "count", ("Forced Fumble",)),
            ("interceptions", "count", ("INT",)),
            ("sack", "count", ("Sack",)),
            ("tfl", "count", ("TFL",)),
        ),
        "S": _SECONDARY,
        "C": _SECONDARY,
        "K": (
            ("patAtt", "count", ("PAT Att",)),
            ("patMade", "count", ("PAT Made",)),
            ("fgAtt", "count", ("FG Att",)),
            ("fgMade", "count", ("FG Made",)),
        ),
        "P": (
            ("punts", "count", ("Punt",)),
            ("netAvg", "sum", ("Net Avg",)),
        ),
    }
)


def _round_int(value: float) -> int:
    return int(math.floor(float(value) + 0.5))


def summarize_events(events: Iterable[Mapping[str, Any]]) -> Tuple[Dict[str, int], Dict[str, int]]:
    """(counts, sums) per stat type. Sums are rounded to whole numbers."""
    counts: Dict[str, int] = {}
    raw_sums: Dict[str, list] = {}
    for ev in events:
        t = str(ev["stat_type"])
        counts[t] = counts.get(t, 0) + 1
        raw_sums.setdefault(t, []).append(float(ev.get("value") or 0.0))
    sums = {t: _round_int(math.fsum(vals)) for t, vals in raw_sums.items()}
    return counts, sums


def build_position_stats(position: Any, counts: Mapping[str, int], sums: Mapping[str, int]) -> Dict[str, int]:
    """Shape per-type counts/sums into the report stat object for `position`.

    Positions without a field map yield {}.
    """
    fields = POSITION_STAT_FIELDS.get(normalize_position(position) or "")
    if not fields:
        return {}
    out: Dict[str, int] = {}
    for name, kind, types in fields:
        if kind == "count":
            out[name] = sum(int(counts.get(t, 0)) for t in types)
        elif kind == "sum":
            out[name] = sum(int(sums.get(t, 0)) for t in types)
        elif kind == "pct":
            made_type, missed_type = types
            made = int(counts.get(made_type, 0))
            attempts = made + int(counts.get(missed_type, 0))
            out[name] = _round_int(made / attempts * 100) if attempts > 0 else 0
        else:  # pragma: no cover
            raise ValueError(f"unknown stat field kind: {kind!r}")
    return out


def stats_for_events(position: Any, events: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    events = list(events)
    if not events:
        return {}
    counts, sums = summarize_events(events)
    return build_position_stats(position, counts, sums)
