"""
Freelance Market server launcher.

Entry point for running the API locally. It handles:
- Logging setup from configuration
- Creating the schema (and optionally the sample data)
- Picking a free port when the configured one is taken
- Running uvicorn until interrupted
"""

import argparse
import socket
import sys
from typing import List, Optional

import uvicorn

from .config import get_config
from .utils.logging_config import get_logger, initialize_logging

logger = get_logger('main')


class PortManager:
    """Finds a usable port near the configured one."""

    def __init__(self, host: str, start_port: int, attempts: int = 10):
        self.host = host
        self.start_port = start_port
        self.attempts = attempts

    def is_port_free(self, port: int) -> bool:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind((self.host, port))
            except OSError:
                return False
            return True

    def find_free_port(self) -> Optional[int]:
        for port in range(self.start_port, self.start_port + self.attempts):
            if self.is_port_free(port):
                return port
        return None


class ServerLauncher:
    """Prepares the database and serves the FastAPI app with uvicorn."""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None, seed: bool = False):
        config = get_config()
        self.host = host or config.server.host
        self.port = port or config.server.port
        self.seed = seed
        self.reload = config.server.auto_reload
        self.log_level = config.app.log_level.lower()

    def prepare_database(self) -> None:
        from .db.database import get_engine, init_db

        init_db()
        if self.seed:
            from sqlalchemy.orm import Session

            from .db.seed import seed_database

            with Session(get_engine()) as session:
                seed_database(session)

    def run(self) -> int:
        logger.info("Starting Freelance Market...")
        self.prepare_database()

        port = PortManager(self.host, self.port).find_free_port()
        if port is None:
            logger.error(f"No available ports found from {self.port}")
            return 1
        if port != self.port:
            logger.warning(f"Port {self.port} is taken, using {port}")

        logger.info(f"Serving on http://{self.host}:{port} (docs at /docs)")
        uvicorn.run(
            "freelance_market.main:app",
            host=self.host,
            port=port,
            reload=self.reload,
            log_level=self.log_level,
        )
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point."""
    parser = argparse.ArgumentParser(description="Run the Freelance Market API server")
    parser.add_argument("--host", help="Interface to bind, defaults to the configured host")
    parser.add_argument("--port", type=int, help="Port to bind, defaults to the configured port")
    parser.add_argument("--seed", action="store_true", help="Reset the database to the sample data")
    args = parser.parse_args(argv)

    initialize_logging()
    return ServerLauncher(host=args.host, port=args.port, seed=args.seed).run()


if __name__ == "__main__":
    sys.exit(main())
