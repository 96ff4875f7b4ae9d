"""Builders shared by the test modules"""
from datetime import datetime, timedelta

from meeting_optimizer.scheduler.models import AvailabilityWindow, Meeting

# Monday morning, before any test window opens
NOW = datetime(2026, 3, 2, 8, 0)


def at(hour, minute=0, day_offset=0):
    return NOW.replace(hour=hour, minute=minute) + timedelta(days=day_offset)


def make_meeting(id, priority=5, duration=30, deadline=None, title=""):
    return Meeting(
        id=id,
        priority=priority,
        duration_minutes=duration,
        deadline=deadline or at(18),
        title=title,
    )


def make_window(start, end):
    return AvailabilityWindow(start_time=start, end_time=end)


