#!/usr/bin/env python3
"""
Main entry point for the Meeting Optimizer

Runs the API server, optimizes a single request file, or checks a running
server against sample requests.
"""

import sys
import json
import logging
from datetime import datetime
from typing import Any, Dict

from meeting_optimizer.config.settings import Config
from meeting_optimizer.scheduler.optimizer import ScheduleOptimizer
from meeting_optimizer.utils.logger import OptimizerLogger
from meeting_optimizer.utils.validators import RequestValidator, DataSanitizer

logger = logging.getLogger(__name__)


def optimize_request(request_data: Dict[str, Any], now: datetime = None) -> Dict[str, Any]:
    """
    Validate and optimize one request in-process

    Args:
        request_data (dict): {"meetings": [...], "availability": [...], "now": optional}
        now (datetime): overrides the request's "now" when given

    Returns:
        dict: the optimization result, or {"error": ..., "details": [...]} when
        the request is invalid
    """
    if now is not None and isinstance(request_data, dict):
        # the override goes through the same timezone checks as the body
        request_data = {**request_data, "now": now.isoformat()}

    errors = RequestValidator.validate_optimize_request(request_data)
    if errors:
        logger.error(f"Invalid request: {len(errors)} errors")
        return {"error": "Invalid request", "details": errors}

    meetings, windows, request_now = RequestValidator.parse_optimize_request(
        DataSanitizer.sanitize_request(request_data)
    )

    result = ScheduleOptimizer().optimize_schedule(meetings, windows, request_now)
    return result.to_dict()


def run_server(host=None, port=None, debug=False):
    """Run the Flask API server"""
    from meeting_optimizer.api.flask_server import OptimizerAPI

    logger.info("Starting Meeting Optimizer API...")

    try:
        api = OptimizerAPI()
        api.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")


def run_checks(api_url="http://localhost:5000", requests_file=None):
    """Send sample requests to a running server and validate the answers"""
    from meeting_optimizer.api.client import OptimizerClient

    logger.info(f"Running checks against {api_url}")

    client = OptimizerClient(api_url)
    results = client.run_checks(requests_file)

    # Print results
    summary = results["summary"]
    print(f"\nCheck Results:")
    print(f"  Total: {summary['total']}")
    print(f"  Passed: {summary['passed']}")
    print(f"  Failed: {summary['failed']}")
    print(f"  Avg response time: {summary['avg_response_time']:.2f}s")
    print(f"  Health check: {'â' if results['health_check'] else 'â'}")

    return results


def main(argv=None):
    """Main CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Meeting Optimizer')
    parser.add_argument('--log-level', default=Config.LOG_LEVEL, help='Logging level')
    parser.add_argument('--log-file', help='Also write logs to this file')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Server command
    server_parser = subparsers.add_parser('server', help='Run API server')
    server_parser.add_argument('--host', default=Config.API_HOST, help='Host to bind to')
    server_parser.add_argument('--port', type=int, default=Config.API_PORT, help='Port to bind to')
    server_parser.add_argument('--debug', action='store_true', help='Enable debug mode')

    # Optimize command (for single request)
    optimize_parser = subparsers.add_parser('optimize', help='Optimize a single request file')
    optimize_parser.add_argument('input_file', help='Input JSON file')
    optimize_parser.add_argument('--output', help='Output JSON file')
    optimize_parser.add_argument('--now', help='Reference time (ISO 8601) used for ranking')

    # Check command
    check_parser = subparsers.add_parser('check', help='Validate a running server')
    check_parser.add_argument('--url', default=f'http://localhost:{Config.API_PORT}', help='API URL to check')
    check_parser.add_argument('--requests', help='JSON file with a list of requests')

    args = parser.parse_args(argv)

    OptimizerLogger.setup_logging(log_level=args.log_level, log_file=args.log_file)

    if args.command == 'server':
        run_server(host=args.host, port=args.port, debug=args.debug)

    elif args.command == 'check':
        results = run_checks(api_url=args.url, requests_file=args.requests)
        return 0 if results["summary"]["failed"] == 0 else 1

    elif args.command == 'optimize':
        try:
            with open(args.input_file, 'r') as f:
                request_data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"❌ {args.input_file} is not valid JSON: {e}")
            print(json.dumps({"error": "Invalid JSON", "details": [str(e)]}, indent=2))
            return 1

        now = None
        if args.now:
            now = RequestValidator.parse_datetime(args.now)
            if now is None:
                parser.error(f"--now must be an ISO 8601 timestamp, got {args.now}")

        result = optimize_request(request_data, now)

        if args.output:
            with open(args.output, 'w') as f:
                json.dump(result, f, indent=2)
        else:
            print(json.dumps(result, indent=2))

        return 1 if "error" in result else 0

    else:
        parser.print_help()

    return 0


if __name__ == '__main__':
    sys.exit(main())
