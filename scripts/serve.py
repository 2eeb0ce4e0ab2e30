#!/usr/bin/env python3
"""Run the dashboard API with uvicorn.

Usage:
    python scripts/serve.py [--host HOST] [--port PORT]

Configuration comes from CBMS_* environment variables (see core/config.py).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

import uvicorn  # noqa: E402

from cbms_events.api.app import create_app  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Serve the CBMS Events API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
