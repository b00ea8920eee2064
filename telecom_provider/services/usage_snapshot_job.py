# telecom_provider/services/usage_snapshot_job.py
import logging

from sqlmodel import Session

from ..db.engine_sync import get_sync_engine
from .usage_snapshot_service import UsageSnapshotService

logger = logging.getLogger("UsageSnapshotJob")


def run_usage_snapshot():
    """
    Run ONE usage snapshot refresh.
    Called daily by APScheduler and by the `refresh-usage` command.
    """
    logger.info("--- RUNNING USAGE SNAPSHOT ---")

    try:
        with Session(get_sync_engine()) as session:
            rows = UsageSnapshotService(session).refresh()
            logger.info(f"--- SNAPSHOT DONE. {len(rows)} plans summarized ---")
            return rows
    except Exception as e:
        logger.critical(f"Critical error while refreshing usage snapshot: {e}", exc_info=True)
        raise
