"""
Configuration settings for the Meeting Optimizer
"""
import os
from datetime import timedelta
from typing import Dict


class Config:
    # Scoring weights (must sum to 1.0)
    PRIORITY_WEIGHT = 0.4
    URGENCY_WEIGHT = 0.4
    BREVITY_WEIGHT = 0.2

    # Scoring normalization
    MAX_PRIORITY = 10
    URGENCY_HORIZON_DAYS = 30  # deadlines this far out score zero urgency
    BREVITY_CAP_MINUTES = 240  # meetings this long score zero brevity

    # Slot search
    SLOT_GRID_MINUTES = 15

    # Request validation
    MIN_PRIORITY = 1
    MAX_MEETINGS_PER_REQUEST = 200
    MAX_WINDOWS_PER_REQUEST = 200

    # API Configuration
    API_HOST = os.getenv("MEETING_OPTIMIZER_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("MEETING_OPTIMIZER_PORT", "5000"))
    API_TIMEOUT = 10  # seconds
    CLIENT_TIMEOUT = 15  # seconds

    # Logging
    LOG_LEVEL = os.getenv("MEETING_OPTIMIZER_LOG_LEVEL", "INFO")
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    QUIET_LOGGERS = ("urllib3", "werkzeug")  # held at WARNING

    # Date/Time Formats
    DISPLAY_DATETIME_FORMAT = "%Y-%m-%d %H:%M"

    @classmethod
    def get_scoring_weights(cls) -> Dict[str, float]:
        """Get the desirability weights, checking they form a convex combination"""
        weights = {
            "priority": cls.PRIORITY_WEIGHT,
            "urgency": cls.URGENCY_WEIGHT,
            "brevity": cls.BREVITY_WEIGHT,
        }

        total = sum(weights.values())
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total:.3f}: {weights}")

        return weights

    @classmethod
    def urgency_horizon(cls) -> timedelta:
        return timedelta(days=cls.URGENCY_HORIZON_DAYS)

    @classmethod
    def slot_grid(cls) -> timedelta:
        return timedelta(minutes=cls.SLOT_GRID_MINUTES)
