#!/usr/bin/env python3
"""Apply Alembic migrations to the Haven database.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade or downgrade to revision
"""

import sys

import logfire
from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory

from haven.config import Settings
from haven.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")
    target = argv[0] if argv else "head"
    head = ScriptDirectory.from_config(alembic_cfg).get_current_head()

    with logfire.span("migrations", target=target, head=head):
        try:
            if target == "head" or target == head:
                command.upgrade(alembic_cfg, "head")
            else:
                # Revisions behind head are treated as a downgrade target
                command.downgrade(alembic_cfg, target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The deploy must not start against a half-migrated schema
            raise

    logfire.info("Database migrations applied", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
