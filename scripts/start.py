"""Startup script for the emulation scoring API.

Starts the API server with uvicorn using host, port and worker count from
the application settings (API_HOST, API_PORT, API_WORKERS).
"""

import os
import signal
import sys

from api.config import get_settings


def uvicorn_args() -> list[str]:
    """Build the uvicorn command line from settings."""
    settings = get_settings()
    return [
        "uvicorn",
        "api.main:app",
        "--host",
        settings.api_host,
        "--port",
        str(settings.api_port),
        "--workers",
        str(settings.api_workers),
        "--log-level",
        settings.log_level.lower(),
    ]


def start_api() -> None:
    """Start the FastAPI application with uvicorn."""
    args = uvicorn_args()
    settings = get_settings()
    print(
        f"Starting API server on {settings.api_host}:{settings.api_port} "
        f"with {settings.api_workers} worker(s)..."
    )

    # Use exec to replace the current process
    os.execvp(args[0], args)


def signal_handler(signum: int, _frame: object) -> None:
    """Handle shutdown signals gracefully."""
    print(f"Received signal {signum}, shutting down...")
    sys.exit(0)


def main() -> None:
    """Main entry point."""
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    start_api()


if __name__ == "__main__":
    main()
