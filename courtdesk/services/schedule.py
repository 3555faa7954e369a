"""Weekly opening-hours grid.

The grid is ``grid[weekday][hour]`` with weekday 0 = Monday. It is stored
as a keyed map (``day0``..``day6``) because the document store cannot hold
nested arrays; ``decode_schedule`` turns it back into the ordered grid.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from courtdesk.core.constants import (
    DAYS_PER_WEEK,
    HOURS_PER_DAY,
    DEFAULT_OPEN_FROM_HOUR,
    DEFAULT_OPEN_TO_HOUR,
)

logger = logging.getLogger(__name__)

Schedule = List[List[bool]]


def default_schedule() -> Schedule:
    """Every day open from 09:00 through the 23:00 hour."""
    return [
        [DEFAULT_OPEN_FROM_HOUR <= hour <= DEFAULT_OPEN_TO_HOUR for hour in range(HOURS_PER_DAY)]
        for _ in range(DAYS_PER_WEEK)
    ]


def encode_schedule(grid: Sequence[Sequence[bool]]) -> Dict[str, List[bool]]:
    return {f"day{index}": [bool(open_) for open_ in day] for index, day in enumerate(grid)}


def decode_schedule(
    data: Optional[Dict[str, Any]], missing_day_default: bool = False
) -> Schedule:
    """Rebuild the 7x24 grid from its map encoding.

    A missing day key becomes an explicit 24-hour row of
    ``missing_day_default`` (closed unless asked otherwise). Short rows are
    padded the same way.
    """
    data = data or {}
    grid: Schedule = []
    for index in range(DAYS_PER_WEEK):
        raw = data.get(f"day{index}")
        if raw is None:
            logger.warning(f"Schedule has no day{index}; defaulting to open={missing_day_default}")
            grid.append([missing_day_default] * HOURS_PER_DAY)
            continue
        day = [bool(open_) for open_ in raw[:HOURS_PER_DAY]]
        day.extend([missing_day_default] * (HOURS_PER_DAY - len(day)))
        grid.append(day)
    return grid


def is_open(grid: Optional[Sequence[Sequence[bool]]], weekday: int, hour: int) -> bool:
    """Whether the club is open at ``hour`` on ``weekday``.

    A grid without a row (or hour) for the weekday fails open.
    """
    if not grid or weekday >= len(grid) or grid[weekday] is None:
        return True
    day = grid[weekday]
    if hour >= len(day):
        return True
    return bool(day[hour])
