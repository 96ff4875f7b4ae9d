"""
HTTP client for a running Meeting Optimizer API
"""
import json
import logging
import time
from datetime import datetime, timedelta
from typing import Any, Dict, List

import requests

from meeting_optimizer.config.settings import Config
from meeting_optimizer.scheduler.models import AvailabilityWindow, Meeting, ScheduledMeeting
from meeting_optimizer.scheduler.scheduling_validator import SchedulingValidator
from meeting_optimizer.utils.validators import DataSanitizer


class OptimizerClient:
    """Client for the Meeting Optimizer API"""

    def __init__(self, base_url: str = "http://localhost:5000", timeout: int = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout or Config.CLIENT_TIMEOUT
        self.logger = logging.getLogger(__name__)

    def health_check(self) -> bool:
        """Check the health endpoint"""
        try:
            response = requests.get(f"{self.base_url}/health", timeout=5)
            if response.status_code == 200:
                self.logger.info("Health check passed")
                return True
            else:
                self.logger.error(f"Health check failed: {response.status_code}")
                return False
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Health check error: {e}")
            return False

    def optimize(self, request_data: Dict[str, Any]) -> Dict[str, Any]:
        """Send an optimize request and return the outcome"""
        try:
            start_time = time.time()

            response = requests.post(
                f"{self.base_url}/optimize",
                json=request_data,
                timeout=self.timeout,
                headers={'Content-Type': 'application/json'}
            )

            response_time = time.time() - start_time

            if response.status_code == 200:
                self.logger.info(f"Request successful (RT: {response_time:.2f}s)")
                return {
                    "success": True,
                    "data": response.json(),
                    "response_time": response_time,
                    "status_code": response.status_code
                }
            else:
                self.logger.error(f"Request failed: {response.status_code}")
                return {
                    "success": False,
                    "error": f"HTTP {response.status_code}",
                    "response_time": response_time,
                    "status_code": response.status_code
                }

        except requests.exceptions.Timeout:
            self.logger.error("Request timeout")
            return {"success": False, "error": "timeout"}
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request error: {e}")
            return {"success": False, "error": str(e)}

    def validate_response(self, request_data: Dict[str, Any],
                          response_data: Dict[str, Any]) -> Dict[str, Any]:
        """Check a response's placements against the request that produced it"""
        required_fields = ["scheduled", "unscheduled", "scheduled_count", "optimization_score"]
        missing = [field for field in required_fields if field not in response_data]
        if missing:
            return {"valid": False, "errors": [f"Missing required field: {field}" for field in missing]}

        # the server answers with sanitized ids
        sanitized = DataSanitizer.sanitize_request(request_data)
        meetings = {meeting.id: meeting for meeting in map(Meeting.from_dict, sanitized["meetings"])}
        windows = [AvailabilityWindow.from_dict(w) for w in request_data["availability"]]

        scheduled = [
            ScheduledMeeting(
                meeting=meetings[item["meeting"]["id"]],
                scheduled_start=datetime.fromisoformat(item["scheduled_start"]),
                scheduled_end=datetime.fromisoformat(item["scheduled_end"]),
                score=item["score"],
            )
            for item in response_data["scheduled"]
        ]

        return SchedulingValidator().validate_schedule(scheduled, windows)

    def run_checks(self, requests_file: str = None) -> Dict[str, Any]:
        """Send sample requests and validate every response"""
        results = {
            "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
            "health_check": self.health_check(),
            "checks": [],
            "summary": {
                "total": 0,
                "passed": 0,
                "failed": 0,
                "avg_response_time": 0
            }
        }

        total_response_time = 0

        for i, request_data in enumerate(self._load_requests(requests_file)):
            self.logger.info(f"Running check {i+1}")
            response = self.optimize(request_data)

            check = {
                "check_id": i + 1,
                "success": response.get("success", False),
                "response_time": response.get("response_time", 0),
            }

            if response.get("success"):
                validation = self.validate_response(request_data, response["data"])
                check["validation_errors"] = validation["errors"]
                check["success"] = validation["valid"]
            else:
                check["error"] = response.get("error", "Unknown error")

            results["summary"]["passed" if check["success"] else "failed"] += 1
            results["summary"]["total"] += 1
            total_response_time += check["response_time"]
            results["checks"].append(check)

        if results["summary"]["total"] > 0:
            results["summary"]["avg_response_time"] = total_response_time / results["summary"]["total"]

        return results

    def _load_requests(self, requests_file: str = None) -> List[Dict[str, Any]]:
        """Load requests from file or build a default sample"""
        if requests_file:
            with open(requests_file, 'r') as f:
                return json.load(f)

        return [sample_request()]


def sample_request(now: datetime = None) -> Dict[str, Any]:
    """Two working days of availability and a handful of competing meetings"""
    now = (now or datetime.now()).replace(minute=0, second=0, microsecond=0)
    day = now + timedelta(days=1)

    windows = []
    for offset in range(2):
        start = (day + timedelta(days=offset)).replace(hour=9)
        windows.append({"start_time": start.isoformat(),
                        "end_time": start.replace(hour=12).isoformat()})

    deadline = (day + timedelta(days=2)).replace(hour=18).isoformat()

    return {
        "now": now.isoformat(),
        "meetings": [
            {"id": "m-1", "title": "Budget review", "priority": 9, "duration_minutes": 60, "deadline": deadline},
            {"id": "m-2", "title": "Design sync", "priority": 5, "duration_minutes": 30, "deadline": deadline},
            {"id": "m-3", "title": "Quarterly planning", "priority": 7, "duration_minutes": 240, "deadline": deadline},
            {"id": "m-4", "title": "1:1", "priority": 3, "duration_minutes": 15, "deadline": deadline},
        ],
        "availability": windows,
    }
