"""
Meeting Scorer - weighted desirability of a meeting at a point in time
"""
from datetime import datetime
from typing import Dict

from meeting_optimizer.config.settings import Config
from meeting_optimizer.scheduler.models import Meeting


class MeetingScorer:
    """
    Combines priority, deadline urgency and brevity into a score in [0, 1].

    The same formula serves two purposes: ranking meetings against the run's
    start time, and comparing candidate slots for one meeting against the
    candidate start time.
    """

    def __init__(self, config: Config = None):
        self.config = config or Config()
        self.weights = self.config.get_scoring_weights()
        self._horizon_seconds = self.config.urgency_horizon().total_seconds()

    def normalized_priority(self, meeting: Meeting) -> float:
        return meeting.priority / self.config.MAX_PRIORITY

    def normalized_urgency(self, meeting: Meeting, reference_time: datetime) -> float:
        """Linear decay from 1.0 at the deadline to 0.0 at the horizon"""
        remaining = (meeting.deadline - reference_time).total_seconds()
        urgency = 1.0 - remaining / self._horizon_seconds
        return min(max(urgency, 0.0), 1.0)

    def normalized_brevity(self, meeting: Meeting) -> float:
        return 1.0 - min(meeting.duration_minutes / self.config.BREVITY_CAP_MINUTES, 1.0)

    def score(self, meeting: Meeting, reference_time: datetime) -> float:
        return self.score_breakdown(meeting, reference_time)["total"]

    def score_breakdown(self, meeting: Meeting, reference_time: datetime) -> Dict[str, float]:
        """Per-factor normalized values plus the weighted total"""
        priority = self.normalized_priority(meeting)
        urgency = self.normalized_urgency(meeting, reference_time)
        brevity = self.normalized_brevity(meeting)

        total = (priority * self.weights["priority"] +
                 urgency * self.weights["urgency"] +
                 brevity * self.weights["brevity"])

        return {
            "priority": priority,
            "urgency": urgency,
            "brevity": brevity,
            "total": total,
        }
