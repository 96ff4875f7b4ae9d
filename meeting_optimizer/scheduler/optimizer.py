"""
Schedule Optimizer - greedy placement of meetings into availability windows
"""
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from meeting_optimizer.config.settings import Config
from meeting_optimizer.scheduler.models import (
    AvailabilityWindow,
    Meeting,
    OccupiedInterval,
    OptimizationResult,
    ScheduledMeeting,
)
from meeting_optimizer.scheduler.scorer import MeetingScorer
from meeting_optimizer.utils.meeting_logger import MeetingLogger

logger = logging.getLogger(__name__)


class ScheduleOptimizer:
    """
    Places meetings one at a time, most desirable first.

    Each meeting gets the best-scoring free grid slot among the windows that
    end no later than its deadline; once placed, the slot is frozen for the
    rest of the run. There is no backtracking, so the packing is not
    guaranteed to be globally optimal.

    The instance only holds configuration. Occupied intervals belong to a
    single call, so one optimizer can serve concurrent requests.
    """

    def __init__(self, config: Config = None):
        self.config = config or Config()
        self.scorer = MeetingScorer(self.config)
        self.grid = self.config.slot_grid()

    def optimize(self, meetings: Iterable[Meeting], windows: Iterable[AvailabilityWindow],
                 now: Optional[datetime] = None) -> List[ScheduledMeeting]:
        """Return placements in the order they were made"""
        return self.optimize_schedule(meetings, windows, now).scheduled

    def optimize_schedule(self, meetings: Iterable[Meeting], windows: Iterable[AvailabilityWindow],
                          now: Optional[datetime] = None) -> OptimizationResult:
        """Run the optimizer and report placements, misses and the mean score"""
        meetings = list(meetings)
        windows = list(windows)
        now = now or self._run_start(meetings)

        MeetingLogger.log_inputs(meetings, windows)

        ranked = self.rank_meetings(meetings, now)
        MeetingLogger.log_ranking(ranked)

        result = OptimizationResult()
        occupied: List[OccupiedInterval] = []

        for meeting, _ in ranked:
            if meeting.duration_minutes <= 0:
                logger.warning(f"⚠️  Skipping '{meeting.id}': non-positive duration {meeting.duration_minutes}")
                result.unscheduled.append(meeting)
                continue

            placement = self.find_best_slot(meeting, windows, occupied)

            if placement is None:
                logger.info(f"   ❌ No suitable slot for '{meeting.title or meeting.id}'")
                result.unscheduled.append(meeting)
                continue

            result.scheduled.append(placement)
            occupied.append(OccupiedInterval(placement.scheduled_start, placement.scheduled_end))

        MeetingLogger.log_result(result, len(meetings))
        return result

    def rank_meetings(self, meetings: List[Meeting], now: datetime) -> List[tuple]:
        """Pair each meeting with its ranking score, highest first; ties keep input order"""
        scored = [(meeting, self.scorer.score(meeting, now)) for meeting in meetings]
        # sorted() is stable, so equal scores stay in input order
        return sorted(scored, key=lambda pair: pair[1], reverse=True)

    def find_best_slot(self, meeting: Meeting, windows: List[AvailabilityWindow],
                       occupied: List[OccupiedInterval]) -> Optional[ScheduledMeeting]:
        """
        Scan every eligible window on the slot grid and return the best free
        candidate, or None when nothing fits.

        A window is eligible only if it ends at or before the meeting's
        deadline. Among equal scores the first candidate in window-then-time
        order wins.
        """
        best: Optional[ScheduledMeeting] = None
        slots_checked = 0
        conflicts_found = 0

        for window in windows:
            if window.end_time > meeting.deadline:
                logger.debug(f"      Window ending {window.end_time.isoformat()} is past the deadline, skipped")
                continue

            candidate = window.start_time
            while candidate + meeting.duration <= window.end_time:
                candidate_end = candidate + meeting.duration
                slots_checked += 1

                if self._has_conflict(candidate, candidate_end, occupied):
                    conflicts_found += 1
                else:
                    score = self.scorer.score(meeting, candidate)
                    if best is None or score > best.score:
                        best = ScheduledMeeting(
                            meeting=meeting,
                            scheduled_start=candidate,
                            scheduled_end=candidate_end,
                            score=score,
                        )

                candidate += self.grid

        logger.debug(f"   📊 '{meeting.id}': checked {slots_checked} slots, {conflicts_found} conflicts")
        return best

    @staticmethod
    def _has_conflict(start: datetime, end: datetime, occupied: List[OccupiedInterval]) -> bool:
        return any(interval.overlaps(start, end) for interval in occupied)

    @staticmethod
    def _run_start(meetings: List[Meeting]) -> datetime:
        if any(m.deadline.tzinfo is not None for m in meetings):
            return datetime.now(timezone.utc)
        return datetime.now()


def optimize(meetings: Iterable[Meeting], availability: Iterable[AvailabilityWindow],
             now: Optional[datetime] = None, config: Config = None) -> List[ScheduledMeeting]:
    """Schedule meetings into the availability windows with default settings"""
    return ScheduleOptimizer(config).optimize(meetings, availability, now)
