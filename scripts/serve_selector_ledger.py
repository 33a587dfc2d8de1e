#!/usr/bin/env python3
"""
Selector Ledger Server

Serves the selector ledger REST API over the configured history
directory, so a suite's learned selectors can be inspected while it runs.

Usage:
    python serve_selector_ledger.py [--host HOST] [--port PORT] [--history-dir DIR]

Examples:
    python serve_selector_ledger.py
    python serve_selector_ledger.py --port 8100 --history-dir /tmp/selector_history
"""

import argparse
import logging

from selfheal import ResolverConfig, SelectorLearner, configure_logging
from selfheal.api import create_app

logger = logging.getLogger("serve_selector_ledger")


def main():
    parser = argparse.ArgumentParser(description="Serve the selector ledger API")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    parser.add_argument("--history-dir", help="Directory for the selector ledger")
    args = parser.parse_args()

    config = ResolverConfig.from_env()
    if args.history_dir:
        config.history_dir = args.history_dir
    configure_logging(config.log_level)

    learner = SelectorLearner.from_config(config)
    learner.load_history()

    logger.info(f"Serving selector ledger from {config.history_dir} on http://{args.host}:{args.port}")
    logger.info(f"API docs available at http://{args.host}:{args.port}/docs")

    import uvicorn
    uvicorn.run(create_app(learner), host=args.host, port=args.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
