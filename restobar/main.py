"""Entry point for the restobar Textual app."""

from __future__ import annotations

import logging
import sys

from restobar.config import DB_PATH, configure_logging
from restobar.persistence import open_store
from restobar.repository import RestobarRepository
from restobar.restobar_app import RestobarApp

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    # Optional single argument: path of the SQLite file.
    db_path = argv[0] if argv else DB_PATH
    configure_logging()
    logger.info("starting db=%s", db_path)
    app = RestobarApp(RestobarRepository(open_store(db_path)))
    app.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
