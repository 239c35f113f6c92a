"""
CLI entrypoint for purging expired login sessions. Run from cron, e.g.:

  python -m worldapi.session_cleanup

Or hourly: 0 * * * * cd /path/to/world-api && .venv/bin/python -m worldapi.session_cleanup
"""

import logging
import sys

from worldapi.core.config import get_settings
from worldapi.core.database import build_engine, build_session_factory
from worldapi.core.logging import configure_logging
from worldapi.services.sessions import SessionGate

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete sessions whose expiry has passed."""
    settings = get_settings()
    configure_logging(settings)
    db = build_session_factory(build_engine(settings))()
    try:
        deleted = SessionGate(db, settings).purge_expired()
        logger.info("Session cleanup completed: sessions_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Session cleanup failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
