"""
Scheduling Validator - checks a produced schedule against its placement rules
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from meeting_optimizer.scheduler.models import AvailabilityWindow, ScheduledMeeting

logger = logging.getLogger(__name__)


class SchedulingValidator:
    """
    Validates an optimizer result against the windows it was built from.

    Every check returns ``{"passed": bool, "message": str, "details": [...]}``
    and ``validate_schedule`` collects failed checks under ``errors``.
    """

    def validate_schedule(self, scheduled: List[ScheduledMeeting],
                          windows: List[AvailabilityWindow]) -> Dict[str, Any]:
        """Run every check and return the combined validation results"""

        validation_results = {
            "timestamp": datetime.now().isoformat(),
            "checks": {},
            "errors": [],
        }

        checks = validation_results["checks"]
        checks["no_conflicts"] = self._validate_no_conflicts(scheduled)
        checks["window_containment"] = self._validate_window_containment(scheduled, windows)
        checks["deadline_respected"] = self._validate_deadlines(scheduled, windows)
        checks["duration_accuracy"] = self._validate_duration_accuracy(scheduled)
        checks["single_placement"] = self._validate_single_placement(scheduled)
        checks["score_range"] = self._validate_score_range(scheduled)

        passed_checks = sum(1 for check in checks.values() if check["passed"])
        logger.info(f"🔍 Validation Results: {passed_checks}/{len(checks)} checks passed")

        for check_name, check_result in checks.items():
            if not check_result["passed"]:
                logger.warning(f"   ❌ {check_name}: {check_result['message']}")
                validation_results["errors"].append({
                    "check": check_name,
                    "message": check_result["message"],
                    "details": check_result.get("details", []),
                })

        validation_results["valid"] = not validation_results["errors"]
        return validation_results

    def _validate_no_conflicts(self, scheduled: List[ScheduledMeeting]) -> Dict[str, Any]:
        """No two placements may overlap"""

        conflicts = []
        for i, first in enumerate(scheduled):
            for second in scheduled[i + 1:]:
                if first.scheduled_start < second.scheduled_end and second.scheduled_start < first.scheduled_end:
                    conflicts.append({
                        "meeting1": first.meeting.id,
                        "meeting2": second.meeting.id,
                    })

        if conflicts:
            return {
                "passed": False,
                "message": f"Found {len(conflicts)} overlapping placements",
                "details": conflicts,
            }

        return {"passed": True, "message": "No time conflicts detected"}

    def _validate_window_containment(self, scheduled: List[ScheduledMeeting],
                                     windows: List[AvailabilityWindow]) -> Dict[str, Any]:
        """Every placement must lie inside some availability window"""

        outside = [
            sm.meeting.id for sm in scheduled
            if not any(w.contains(sm.scheduled_start, sm.scheduled_end) for w in windows)
        ]

        if outside:
            return {
                "passed": False,
                "message": f"{len(outside)} placements fall outside every availability window",
                "details": outside,
            }

        return {"passed": True, "message": "All placements inside availability windows"}

    def _validate_deadlines(self, scheduled: List[ScheduledMeeting],
                            windows: List[AvailabilityWindow]) -> Dict[str, Any]:
        """Placements end by the deadline, inside a window that also ends by the deadline"""

        late = []
        for sm in scheduled:
            deadline = sm.meeting.deadline
            if sm.scheduled_end > deadline:
                late.append({"meeting": sm.meeting.id, "reason": "ends after deadline"})
                continue

            host = self._eligible_window(sm, windows)
            if host is None:
                late.append({"meeting": sm.meeting.id, "reason": "no containing window ends by the deadline"})

        if late:
            return {
                "passed": False,
                "message": f"{len(late)} placements violate their deadline",
                "details": late,
            }

        return {"passed": True, "message": "All deadlines respected"}

    def _validate_duration_accuracy(self, scheduled: List[ScheduledMeeting]) -> Dict[str, Any]:
        """Placement length must equal the requested duration exactly"""

        mismatched = []
        for sm in scheduled:
            actual = (sm.scheduled_end - sm.scheduled_start).total_seconds() / 60
            if actual != sm.meeting.duration_minutes:
                mismatched.append({
                    "meeting": sm.meeting.id,
                    "expected": sm.meeting.duration_minutes,
                    "actual": actual,
                })

        if mismatched:
            return {
                "passed": False,
                "message": f"Duration mismatch for {len(mismatched)} placements",
                "details": mismatched,
            }

        return {"passed": True, "message": "All durations accurate"}

    def _validate_single_placement(self, scheduled: List[ScheduledMeeting]) -> Dict[str, Any]:
        seen = set()
        duplicates = []
        for sm in scheduled:
            if sm.meeting.id in seen:
                duplicates.append(sm.meeting.id)
            seen.add(sm.meeting.id)

        if duplicates:
            return {
                "passed": False,
                "message": f"{len(duplicates)} meetings placed more than once",
                "details": duplicates,
            }

        return {"passed": True, "message": "Each meeting placed at most once"}

    def _validate_score_range(self, scheduled: List[ScheduledMeeting]) -> Dict[str, Any]:
        out_of_range = [sm.meeting.id for sm in scheduled if not 0.0 <= sm.score <= 1.0]

        if out_of_range:
            return {
                "passed": False,
                "message": f"{len(out_of_range)} scores outside [0, 1]",
                "details": out_of_range,
            }

        return {"passed": True, "message": "All scores within [0, 1]"}

    @staticmethod
    def _eligible_window(sm: ScheduledMeeting,
                         windows: List[AvailabilityWindow]) -> Optional[AvailabilityWindow]:
        for window in windows:
            if window.end_time <= sm.meeting.deadline and window.contains(sm.scheduled_start, sm.scheduled_end):
                return window
        return None
