#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade (or downgrade) to a revision
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from board.config import Settings
from board.util.logging import setup_logging
from board.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Migrate the schema to the requested revision and log any errors."""
    settings = Settings()

    configure_logfire(settings)
    setup_logging(settings)

    target = argv[1] if len(argv) > 1 else "head"

    with logfire.span("migrations.run", target=target):
        try:
            alembic_cfg = Config("alembic.ini")

            if target == "head" or not target.startswith("-"):
                command.upgrade(alembic_cfg, target)
            else:
                command.downgrade(alembic_cfg, target)

            logfire.info("Database migrations completed", target=target)
            return 0

        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the container fails and doesn't start with broken schema
            raise


if __name__ == "__main__":
    sys.exit(main(sys.argv))
