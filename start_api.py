#!/usr/bin/env python3
"""
Run the DevEvent API under uvicorn.

Usage:
    python start_api.py              # Development mode, auto-reload
    python start_api.py --prod       # Production mode
    python start_api.py --port 9000  # Custom port
"""

import argparse
import sys

import uvicorn

from api.config import ConfigurationError, get_settings

APP = "api.main:app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the DevEvent API")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument("--prod", action="store_true", help="Production mode: no reload, info logging")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes in production mode")
    parser.add_argument("--no-reload", action="store_true", help="Development mode without auto-reload")
    return parser


def uvicorn_options(args: argparse.Namespace) -> dict:
    """Translate command-line flags into ``uvicorn.run`` keyword arguments."""
    options = {"host": args.host, "port": args.port, "loop": "asyncio", "http": "h11"}
    if args.prod:
        options.update(workers=args.workers, log_level="info")
    else:
        options["log_level"] = "debug"
        if not args.no_reload:
            options.update(reload=True, reload_dirs=["api", "database", "media"])
    return options


def main():
    """Check configuration before handing over to uvicorn."""
    args = build_parser().parse_args()

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        print(f"❌ {exc}")
        sys.exit(1)

    mode = "production" if args.prod else "development"
    print(f"🚀 DevEvent API ({mode}) on http://{args.host}:{args.port}")
    print(f"   🗄️  MongoDB database: {settings.mongodb_db}")
    print(f"   🖼️  Cloudinary folder: {settings.upload_folder}")
    if not args.prod:
        print(f"   📚 Docs: http://{args.host}:{args.port}/docs")

    uvicorn.run(APP, **uvicorn_options(args))


if __name__ == "__main__":
    main()
