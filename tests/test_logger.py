import json
import logging

import pytest

from meeting_optimizer.utils.logger import OptimizerLogger


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_setup_writes_to_log_file(root_logger, tmp_path):
    log_file = tmp_path / "optimizer.log"

    OptimizerLogger.setup_logging("debug", str(log_file))
    logging.getLogger("meeting_optimizer.test").debug("grid scan done")

    assert root_logger.level == logging.DEBUG
    assert "meeting_optimizer.test - DEBUG - grid scan done" in log_file.read_text()


def test_repeated_setup_does_not_stack_handlers(root_logger):
    OptimizerLogger.setup_logging("INFO")
    OptimizerLogger.setup_logging("WARNING")

    assert len(root_logger.handlers) == 1
    assert logging.getLogger("werkzeug").level == logging.WARNING


def test_request_summary_is_one_json_line(caplog):
    caplog.set_level(logging.INFO, logger="meeting_optimizer.utils.logger")

    OptimizerLogger.log_request_response(
        "req-1",
        {"meetings": [{}, {}], "availability": [{}]},
        {"scheduled_count": 1, "unscheduled": ["b"], "optimization_score": 0.5},
        0.012345,
    )

    message = caplog.records[-1].getMessage()
    summary = json.loads(message[message.index("{"):])
    assert summary == {
        "request_id": "req-1",
        "meetings": 2,
        "windows": 1,
        "scheduled": 1,
        "unscheduled": 1,
        "optimization_score": 0.5,
        "processing_time_seconds": 0.0123,
    }
