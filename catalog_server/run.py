#!/usr/bin/env python3
"""Entry point for the catalog server."""
import argparse
import os

import uvicorn
from dotenv import load_dotenv

from itemdb.log import setup_logging


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description="Item catalog server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=9000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument(
        "--backend",
        choices=["sqlite", "json"],
        default=None,
        help="Storage backend (default: $ITEMDB_BACKEND or sqlite)",
    )
    args = parser.parse_args()

    if args.backend:
        os.environ["ITEMDB_BACKEND"] = args.backend

    setup_logging(os.environ.get("LOG_LEVEL", "INFO"))

    uvicorn.run(
        "catalog_server.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
