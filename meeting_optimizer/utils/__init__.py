"""
Utility modules for the Meeting Optimizer
"""

from .logger import OptimizerLogger
from .validators import RequestValidator, DataSanitizer
from .meeting_logger import MeetingLogger

__all__ = ['OptimizerLogger', 'RequestValidator', 'DataSanitizer', 'MeetingLogger']
