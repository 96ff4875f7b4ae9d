"""
Validation utilities for the Meeting Optimizer

The optimizer core trusts its inputs, so everything arriving from outside
(API bodies, CLI input files) passes through here first.
"""
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from meeting_optimizer.config.settings import Config
from meeting_optimizer.scheduler.models import AvailabilityWindow, Meeting


class RequestValidator:
    """Validator for incoming optimize requests"""

    @staticmethod
    def parse_datetime(value: Any) -> Optional[datetime]:
        """Parse an ISO 8601 timestamp, returning None when it is not one"""
        if not isinstance(value, str):
            return None
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None

    @staticmethod
    def validate_meeting(meeting: Any, index: int) -> List[str]:
        """Validate one meeting entry and return a list of errors"""
        if not isinstance(meeting, dict):
            return [f"Meeting {index} must be an object"]

        errors = []

        for field in ("id", "priority", "duration_minutes", "deadline"):
            if field not in meeting:
                errors.append(f"Meeting {index} missing required field: {field}")

        priority = meeting.get("priority")
        if "priority" in meeting:
            if not isinstance(priority, int) or isinstance(priority, bool):
                errors.append(f"Meeting {index} priority must be an integer")
            elif not Config.MIN_PRIORITY <= priority <= Config.MAX_PRIORITY:
                errors.append(f"Meeting {index} priority must be between "
                              f"{Config.MIN_PRIORITY} and {Config.MAX_PRIORITY}, got {priority}")

        duration = meeting.get("duration_minutes")
        if "duration_minutes" in meeting:
            if not isinstance(duration, int) or isinstance(duration, bool):
                errors.append(f"Meeting {index} duration_minutes must be an integer")
            elif duration <= 0:
                errors.append(f"Meeting {index} duration_minutes must be positive, got {duration}")

        if "deadline" in meeting and RequestValidator.parse_datetime(meeting["deadline"]) is None:
            errors.append(f"Meeting {index} has invalid deadline: {meeting['deadline']}. Expected ISO 8601")

        if "title" in meeting and not isinstance(meeting["title"], str):
            errors.append(f"Meeting {index} title must be a string")

        return errors

    @staticmethod
    def validate_window(window: Any, index: int) -> List[str]:
        """Validate one availability window and return a list of errors"""
        if not isinstance(window, dict):
            return [f"Window {index} must be an object"]

        errors = []
        start = end = None

        for field in ("start_time", "end_time"):
            if field not in window:
                errors.append(f"Window {index} missing required field: {field}")
                continue
            parsed = RequestValidator.parse_datetime(window[field])
            if parsed is None:
                errors.append(f"Window {index} has invalid {field}: {window[field]}. Expected ISO 8601")
            elif field == "start_time":
                start = parsed
            else:
                end = parsed

        if start is not None and end is not None:
            if (start.tzinfo is None) != (end.tzinfo is None):
                errors.append(f"Window {index} mixes timezone-aware and naive timestamps")
            elif start >= end:
                errors.append(f"Window {index} start_time must be before end_time")

        return errors

    @staticmethod
    def validate_optimize_request(request_data: Any) -> List[str]:
        """Validate an optimize request body and return list of errors"""
        if not isinstance(request_data, dict):
            return ["Request body must be a JSON object"]

        errors = []

        meetings = request_data.get("meetings")
        windows = request_data.get("availability")

        if not isinstance(meetings, list):
            errors.append("'meetings' must be a list")
            meetings = []
        elif len(meetings) > Config.MAX_MEETINGS_PER_REQUEST:
            errors.append(f"Too many meetings: {len(meetings)} (max {Config.MAX_MEETINGS_PER_REQUEST})")

        if not isinstance(windows, list):
            errors.append("'availability' must be a list")
            windows = []
        elif len(windows) > Config.MAX_WINDOWS_PER_REQUEST:
            errors.append(f"Too many availability windows: {len(windows)} (max {Config.MAX_WINDOWS_PER_REQUEST})")

        for i, meeting in enumerate(meetings):
            errors.extend(RequestValidator.validate_meeting(meeting, i))

        for i, window in enumerate(windows):
            errors.extend(RequestValidator.validate_window(window, i))

        # compared the way DataSanitizer will store them
        ids = [str(m["id"]).strip() for m in meetings if isinstance(m, dict) and "id" in m]
        if len(ids) != len(set(ids)):
            errors.append("Meeting ids must be unique")

        now = None
        if request_data.get("now") is not None:
            now = RequestValidator.parse_datetime(request_data["now"])
            if now is None:
                errors.append(f"Invalid 'now': {request_data['now']}. Expected ISO 8601")

        if not errors:
            stamps = [RequestValidator.parse_datetime(m["deadline"]) for m in meetings]
            stamps += [RequestValidator.parse_datetime(w["start_time"]) for w in windows]
            if now is not None:
                stamps.append(now)
            if len({stamp.tzinfo is None for stamp in stamps}) > 1:
                errors.append("Request mixes timezone-aware and naive timestamps")

        return errors

    @staticmethod
    def parse_optimize_request(request_data: Dict[str, Any]
                               ) -> Tuple[List[Meeting], List[AvailabilityWindow], Optional[datetime]]:
        """Build model objects from a request that already passed validation"""
        meetings = [Meeting.from_dict(m) for m in request_data["meetings"]]
        windows = [AvailabilityWindow.from_dict(w) for w in request_data["availability"]]
        now = RequestValidator.parse_datetime(request_data.get("now"))
        return meetings, windows, now


class DataSanitizer:
    """Sanitize and clean input data"""

    @staticmethod
    def sanitize_text(text: str) -> str:
        """Sanitize text content"""
        # Remove excessive whitespace
        text = re.sub(r'\s+', ' ', text.strip())
        # Remove potentially harmful characters
        text = re.sub(r'[<>"\']', '', text)
        return text

    @staticmethod
    def sanitize_request(request_data: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitize meeting titles and ids without touching the caller's dict"""
        sanitized = request_data.copy()

        meetings = []
        for meeting in sanitized.get("meetings", []):
            meeting = dict(meeting)
            meeting["id"] = str(meeting["id"]).strip()
            if isinstance(meeting.get("title"), str):
                meeting["title"] = DataSanitizer.sanitize_text(meeting["title"])
            meetings.append(meeting)

        sanitized["meetings"] = meetings
        return sanitized
