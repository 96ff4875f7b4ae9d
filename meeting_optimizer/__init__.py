"""
Meeting Optimizer - greedy single-calendar meeting scheduling

This package provides a scheduling optimizer that:
- Ranks pending meetings by priority, deadline urgency and brevity
- Places each meeting on a 15-minute grid inside free-time windows
- Never double-books a slot claimed earlier in the same run
- Exposes the optimizer over a small Flask API and CLI
"""

__version__ = "1.0.0"
__author__ = "Meeting Optimizer Team"

from .scheduler.models import (
    Meeting,
    AvailabilityWindow,
    ScheduledMeeting,
    OptimizationResult,
)
from .scheduler.optimizer import ScheduleOptimizer, optimize

__all__ = [
    'Meeting',
    'AvailabilityWindow',
    'ScheduledMeeting',
    'OptimizationResult',
    'ScheduleOptimizer',
    'optimize',
]
