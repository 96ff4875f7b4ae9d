"""
Flask API server for the Meeting Optimizer
"""
import logging
import time
import uuid
from flask import Flask, request, jsonify
from flask_cors import CORS
import signal
import sys
import threading
from datetime import datetime

from meeting_optimizer.config.settings import Config
from meeting_optimizer.scheduler.availability import remaining_windows, total_free_minutes
from meeting_optimizer.scheduler.optimizer import ScheduleOptimizer
from meeting_optimizer.scheduler.scheduling_validator import SchedulingValidator
from meeting_optimizer.utils.logger import OptimizerLogger
from meeting_optimizer.utils.validators import RequestValidator, DataSanitizer

logger = logging.getLogger(__name__)


class OptimizerAPI:
    """
    Stateless Flask API wrapping the schedule optimizer.

    Nothing is persisted: each request carries its own meetings and
    availability, and the response carries the placements back.
    """

    def __init__(self, config: Config = None):
        self.config = config or Config()
        self.app = Flask(__name__)
        CORS(self.app)  # Enable CORS for cross-origin requests

        self.optimizer = ScheduleOptimizer(self.config)
        self.validator = SchedulingValidator()

        self.requests_processed = 0
        self._stats_lock = threading.Lock()
        self.start_time = time.time()

        # Setup routes
        self._setup_routes()

    def _setup_routes(self):
        """Setup Flask routes"""

        @self.app.route('/health', methods=['GET'])
        def health_check():
            """Health check endpoint"""
            return jsonify({
                "status": "healthy",
                "timestamp": datetime.now().isoformat(),
            })

        @self.app.route('/optimize', methods=['POST'])
        def optimize_schedule():
            """Schedule the posted meetings into the posted availability"""
            started = time.time()

            data = request.get_json(silent=True)
            if data is None:
                logger.error("No JSON data received")
                return jsonify({"error": "No JSON data provided"}), 400

            errors = RequestValidator.validate_optimize_request(data)
            if errors:
                logger.warning(f"Rejected optimize request with {len(errors)} validation errors")
                return jsonify({"error": "Invalid request", "details": errors}), 400

            request_id = data.get("request_id") or str(uuid.uuid4())
            logger.info(f"🚀 RECEIVED OPTIMIZE REQUEST: {request_id}")

            try:
                meetings, windows, now = RequestValidator.parse_optimize_request(
                    DataSanitizer.sanitize_request(data)
                )
                result = self.optimizer.optimize_schedule(meetings, windows, now)
            except Exception as e:
                logger.error(f"Error processing request {request_id}: {e}")
                return jsonify({"error": "Internal server error"}), 500

            validation = self.validator.validate_schedule(result.scheduled, windows)
            if not validation["valid"]:
                logger.error(f"Schedule for {request_id} failed validation: {validation['errors']}")

            processing_time = time.time() - started
            if processing_time > self.config.API_TIMEOUT:
                logger.warning(f"⚠️  Processing time ({processing_time:.2f}s) exceeded limit "
                               f"({self.config.API_TIMEOUT}s)")

            response = result.to_dict()
            response.update({
                "request_id": request_id,
                "remaining_free_minutes": total_free_minutes(remaining_windows(windows, result.scheduled)),
                "processing_time_seconds": round(processing_time, 4),
            })

            with self._stats_lock:
                self.requests_processed += 1
            OptimizerLogger.log_request_response(request_id, data, response, processing_time)

            return jsonify(response)

        @self.app.route('/status', methods=['GET'])
        def get_status():
            """Get server status and statistics"""
            return jsonify({
                "status": "running",
                "requests_processed": self.requests_processed,
                "uptime": time.time() - self.start_time,
            })

        @self.app.errorhandler(404)
        def not_found(error):
            return jsonify({"error": "Endpoint not found"}), 404

        @self.app.errorhandler(405)
        def method_not_allowed(error):
            return jsonify({"error": "Method not allowed"}), 405

        @self.app.errorhandler(500)
        def internal_error(error):
            return jsonify({"error": "Internal server error"}), 500

    def _setup_signal_handlers(self):
        """Setup graceful shutdown handlers"""
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, shutting down gracefully...")
            self.shutdown()
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def run(self, host=None, port=None, debug=False):
        """Run the Flask server"""
        host = host or self.config.API_HOST
        port = port or self.config.API_PORT

        self._setup_signal_handlers()
        self.start_time = time.time()

        logger.info(f"Starting Meeting Optimizer API server on {host}:{port}")

        try:
            self.app.run(
                host=host,
                port=port,
                debug=debug,
                threaded=True,  # each request owns its own optimization run
                use_reloader=False
            )
        except Exception as e:
            logger.error(f"Failed to start server: {e}")
            raise

    def shutdown(self):
        """Graceful shutdown"""
        logger.info(f"Shutting down Meeting Optimizer API server after {self.requests_processed} requests")


def create_app(config: Config = None) -> Flask:
    """Factory function to create Flask app"""
    api = OptimizerAPI(config)
    return api.app
