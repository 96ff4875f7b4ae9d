"""
Logging setup and per-request summaries for the Meeting Optimizer
"""
import json
import logging
import sys

from meeting_optimizer.config.settings import Config


class OptimizerLogger:
    """Root logger configuration shared by the CLI and the API server"""

    @staticmethod
    def setup_logging(log_level: str = None, log_file: str = None) -> logging.Logger:
        """Send every log record to stdout, and to log_file when given"""
        handlers = [logging.StreamHandler(sys.stdout)]
        if log_file:
            handlers.append(logging.FileHandler(log_file))

        formatter = logging.Formatter(Config.LOG_FORMAT)
        for handler in handlers:
            handler.setFormatter(formatter)

        root = logging.getLogger()
        root.setLevel((log_level or Config.LOG_LEVEL).upper())
        # repeated setup must not duplicate output
        root.handlers = handlers

        for name in Config.QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        return root

    @staticmethod
    def log_request_response(request_id: str, request_data: dict,
                             response_data: dict, processing_time: float):
        """One JSON line per optimize request: input sizes and outcome"""
        summary = {
            "request_id": request_id,
            "meetings": len(request_data.get("meetings", [])),
            "windows": len(request_data.get("availability", [])),
            "scheduled": response_data.get("scheduled_count"),
            "unscheduled": len(response_data.get("unscheduled", [])),
            "optimization_score": response_data.get("optimization_score"),
            "processing_time_seconds": round(processing_time, 4),
        }
        logging.getLogger(__name__).info(f"📋 Request processed: {json.dumps(summary)}")
