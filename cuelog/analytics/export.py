"""Report Export - Tabular views of a DashboardReport as pandas DataFrames."""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List

import pandas as pd

from ..models.analytics import DashboardReport

logger = logging.getLogger(__name__)

SHOT_ANALYSIS_COLUMNS = ['field', 'category', 'value', 'label', 'total', 'successful', 'success_rate']


def _frame(rows: List, columns: List[str]) -> pd.DataFrame:
    return pd.DataFrame([asdict(row) for row in rows], columns=columns)


def summary_frame(report: DashboardReport) -> pd.DataFrame:
    """One-row frame of the headline stats."""
    row = asdict(report.stats)
    row['games_lost'] = report.stats.games_lost
    return pd.DataFrame([row])


def shot_analysis_frame(report: DashboardReport) -> pd.DataFrame:
    """All eight shot breakdowns stacked, with the shot field they came from."""
    rows = []
    for field_name, entries in report.shot_analyses.items():
        for entry in entries:
            row = asdict(entry)
            row['field'] = field_name
            rows.append(row)
    return pd.DataFrame(rows, columns=SHOT_ANALYSIS_COLUMNS)


def report_to_frames(report: DashboardReport) -> Dict[str, pd.DataFrame]:
    """
    Convert a report into one DataFrame per dashboard section.

    Returns:
        Dictionary keyed by section name: summary, game_types, outcomes,
        monthly, shot_analysis
    """
    return {
        'summary': summary_frame(report),
        'game_types': _frame(report.game_types, ['game_type', 'label', 'games', 'win_rate']),
        'outcomes': _frame(report.outcomes, ['outcome', 'label', 'count', 'percentage']),
        'monthly': _frame(report.monthly, ['year', 'month', 'label', 'games', 'shots']),
        'shot_analysis': shot_analysis_frame(report),
    }


def export_report_csv(report: DashboardReport, output_dir: str) -> List[Path]:
    """
    Write each report section to ``<output_dir>/<section>.csv``.

    Returns:
        Paths of the written files
    """
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for name, frame in report_to_frames(report).items():
        path = directory / f"{name}.csv"
        frame.to_csv(path, index=False)
        written.append(path)

    logger.info("Exported %d report sections to %s", len(written), directory)
    return written
