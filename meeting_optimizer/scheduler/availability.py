"""
Availability helpers

Works out how much free time is left once meetings have been placed, so a
caller can re-run the optimizer against what remains.
"""
from datetime import datetime
from typing import Iterable, List, Tuple

from meeting_optimizer.scheduler.models import AvailabilityWindow, ScheduledMeeting


def subtract_interval(window: AvailabilityWindow, start: datetime,
                      end: datetime) -> List[AvailabilityWindow]:
    """
    Remove [start, end) from a window.

    Returns zero, one or two windows. Pieces of zero length are dropped.
    """
    if end <= window.start_time or start >= window.end_time:
        return [window]

    pieces = []
    if window.start_time < start:
        pieces.append(AvailabilityWindow(window.start_time, start))
    if end < window.end_time:
        pieces.append(AvailabilityWindow(end, window.end_time))
    return pieces


def remaining_windows(windows: Iterable[AvailabilityWindow],
                      scheduled: Iterable[ScheduledMeeting]) -> List[AvailabilityWindow]:
    """
    Subtract every placed meeting from every window.

    Each input window is cut independently and the pieces keep the input
    order; pieces are not merged across windows.
    """
    busy: List[Tuple[datetime, datetime]] = [(sm.scheduled_start, sm.scheduled_end) for sm in scheduled]

    remaining = []
    for window in windows:
        pieces = [window]
        for start, end in busy:
            pieces = [piece for current in pieces for piece in subtract_interval(current, start, end)]
        remaining.extend(pieces)

    return remaining


def total_free_minutes(windows: Iterable[AvailabilityWindow]) -> int:
    return int(sum((w.end_time - w.start_time).total_seconds() for w in windows) // 60)
