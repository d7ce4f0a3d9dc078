#!/usr/bin/env python3
"""
Start the VIES proxy API via uvicorn.

Usage:
    python scripts/serve.py
    python scripts/serve.py --host 0.0.0.0 --port 8080 --reload
"""
import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Load .env file if present (before any imports that need env vars)
from vies_proxy.utils.env import load_env_if_present
load_env_if_present()

import uvicorn

from vies_proxy.core.config import settings


def main() -> int:
    parser = argparse.ArgumentParser(description="Start the VIES proxy API")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Bind port (default: PORT or {settings.port})"
    )
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload on code changes")
    args = parser.parse_args()

    uvicorn.run(
        "vies_proxy.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
