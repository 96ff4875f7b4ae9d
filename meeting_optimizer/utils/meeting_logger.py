"""
Specialized logging utilities for optimization runs
"""
import logging
from datetime import datetime
from typing import List, Tuple

from meeting_optimizer.config.settings import Config
from meeting_optimizer.scheduler.models import AvailabilityWindow, Meeting, OptimizationResult

logger = logging.getLogger(__name__)


def _fmt(value: datetime) -> str:
    return value.strftime(Config.DISPLAY_DATETIME_FORMAT)


class MeetingLogger:
    """Specialized logger for optimization run events"""

    @staticmethod
    def log_inputs(meetings: List[Meeting], windows: List[AvailabilityWindow]):
        """Log the meetings and availability windows a run starts from"""

        logger.info(f"🚀 SCHEDULE OPTIMIZATION STARTED")
        logger.info(f"   📋 Meetings to schedule: {len(meetings)}")
        logger.info(f"   ⏰ Availability windows: {len(windows)}")

        for i, meeting in enumerate(meetings, 1):
            logger.debug(f"      {i}. {meeting.title or meeting.id}")
            logger.debug(f"         Priority: {meeting.priority}/10 | Duration: {meeting.duration_minutes} min | "
                         f"Deadline: {_fmt(meeting.deadline)}")

        for i, window in enumerate(windows, 1):
            hours = (window.end_time - window.start_time).total_seconds() / 3600
            logger.debug(f"      {i}. {_fmt(window.start_time)} → {_fmt(window.end_time)} ({hours:.1f} hours)")

    @staticmethod
    def log_ranking(ranked: List[Tuple[Meeting, float]]):
        """Log the order meetings will be placed in"""

        logger.info(f"🔢 PLACEMENT ORDER (highest score first):")
        for i, (meeting, score) in enumerate(ranked, 1):
            logger.info(f"   #{i}: {meeting.title or meeting.id} "
                        f"(priority {meeting.priority}/10, {meeting.duration_minutes} min, score {score:.3f})")

    @staticmethod
    def log_result(result: OptimizationResult, total_meetings: int):
        """Log the final schedule with per-meeting scores"""

        logger.info(f"✅ OPTIMIZATION COMPLETED")
        logger.info(f"   📊 Scheduled: {result.scheduled_count}/{total_meetings} meetings")
        logger.info(f"   🎯 Overall optimization score (average): {result.optimization_score:.3f}")

        for i, sm in enumerate(result.scheduled, 1):
            logger.info(f"   #{i}: {sm.meeting.title or sm.meeting.id}")
            logger.info(f"      ⏰ {_fmt(sm.scheduled_start)} → {_fmt(sm.scheduled_end)} | score {sm.score:.3f}")

        if result.unscheduled:
            missed = ', '.join(m.title or m.id for m in result.unscheduled)
            logger.info(f"   ❌ No feasible slot for: {missed}")
