"""Shot Breakdowns - Success rate grouped by a shot attribute.

Every breakdown on the dashboard is the same reduction: pick a value out of
each shot, skip shots where it is missing, and tally how many shots in each
group were pocketed. ``analyze_shots`` is that reduction; the per-field
breakdowns only differ in the selector and the label formatter they pass.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..helpers.rates import percentage
from ..helpers.shot_taxonomy import format_value_label, power_range
from ..models.analytics import ShotAnalysis

# Shot field -> category name shown on the dashboard
SHOT_ANALYSIS_FIELDS = {
    'distance': 'Distance',
    'table_position': 'Position',
    'cut_angle': 'Cut Angle',
    'spin': 'Spin Type',
    'cue_ball_control': 'Cue Ball Control',
    'shot_type': 'Shot Type',
    'strategic_intent': 'Strategic Intent',
}

POWER_CATEGORY = 'Power Level'


def field_value(record: Any, name: str) -> Any:
    """
    Read a field from a model object or a raw database row.

    Missing fields read as None so malformed records drop out of a
    breakdown instead of failing the whole computation.
    """
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def is_pocketed(shot: Any) -> bool:
    return field_value(shot, 'outcome') == 'pocketed'


def analyze_shots(
    shots: Iterable[Any],
    selector: Callable[[Any], Optional[str]],
    category: str,
    label_formatter: Callable[[str], str] = format_value_label,
) -> List[ShotAnalysis]:
    """
    Group shots by a selected value and compute the pocketed rate per group.

    Groups appear in the order their value is first seen.

    Args:
        shots: Shot models or row mappings
        selector: Returns the grouping value for a shot, or None/'' to skip it
        category: Category name stored on every entry
        label_formatter: Turns a raw value into its display label

    Returns:
        One ShotAnalysis per distinct value
    """
    groups: Dict[str, Dict[str, int]] = {}

    for shot in shots or []:
        value = selector(shot)
        if value is None or value == '':
            continue
        key = str(value)
        tally = groups.setdefault(key, {'total': 0, 'successful': 0})
        tally['total'] += 1
        if is_pocketed(shot):
            tally['successful'] += 1

    return [
        ShotAnalysis(
            category=category,
            value=value,
            label=label_formatter(value),
            total=tally['total'],
            successful=tally['successful'],
            success_rate=percentage(tally['successful'], tally['total']),
        )
        for value, tally in groups.items()
    ]


def analyze_field(shots: Iterable[Any], field: str, category: Optional[str] = None) -> List[ShotAnalysis]:
    """Breakdown by a categorical shot field such as 'distance' or 'spin'."""
    if category is None:
        category = SHOT_ANALYSIS_FIELDS.get(field, format_value_label(field).title())
    return analyze_shots(shots, lambda shot: field_value(shot, field), category)


def analyze_power_levels(shots: Iterable[Any]) -> List[ShotAnalysis]:
    """Breakdown by power level bucketed into Low (1-2), Medium (3-4) and High (5)."""
    return analyze_shots(
        shots,
        lambda shot: power_range(field_value(shot, 'power_level')),
        POWER_CATEGORY,
        label_formatter=lambda value: value,
    )
