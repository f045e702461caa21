#!/usr/bin/env python
"""
Project Metrics API Runner.

The single entry point for serving dashboard.main:app.

Usage:
    python run_dashboard.py
    python run_dashboard.py --port 9000 --reload

Defaults come from DASHBOARD_HOST, DASHBOARD_PORT (or PORT) and
ENVIRONMENT=development (enables reload), read from .env.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("run_dashboard")

APP_PATH = "dashboard.main:app"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the Project Metrics API")
    parser.add_argument("--host", default=os.getenv("DASHBOARD_HOST", "0.0.0.0"))
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("DASHBOARD_PORT", os.getenv("PORT", "8000"))),
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        default=os.getenv("ENVIRONMENT", "production") == "development",
        help="Restart on code changes",
    )
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger.info(f"Serving {APP_PATH} on {args.host}:{args.port} (reload={args.reload})")

    try:
        uvicorn.run(
            APP_PATH,
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=args.log_level,
        )
    except (OSError, RuntimeError) as e:
        logger.error(f"Failed to start API server: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
