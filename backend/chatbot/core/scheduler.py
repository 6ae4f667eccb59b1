"""
Background scheduler for periodic tasks.

This module manages background jobs that run on a schedule:
- Purge expired sessions: runs every SESSION_CLEANUP_INTERVAL_MINUTES,
  only when a session TTL is configured

Each app builds its own scheduler, so jobs always target that app's stores.
"""

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from chatbot.services.session_store import SessionStore
import logging

logger = logging.getLogger(__name__)

PURGE_JOB_ID = "purge_expired_sessions"


def create_scheduler() -> BackgroundScheduler:
    return BackgroundScheduler()


def purge_expired_sessions_job(sessions: SessionStore):
    """
    Background job to drop expired sessions.

    Expired tokens already stop resolving; this keeps the map from growing.
    """
    try:
        removed = sessions.purge_expired()
        logger.info(f"Session cleanup completed: removed {removed} expired sessions")
    except Exception as e:
        logger.error(f"Error in purge_expired_sessions_job: {str(e)}")


def start_scheduler(scheduler: BackgroundScheduler, sessions: SessionStore, interval_minutes: int):
    """
    Start the background scheduler.

    This should be called when the FastAPI app starts.
    """
    if not scheduler.running:
        scheduler.add_job(
            purge_expired_sessions_job,
            trigger=IntervalTrigger(minutes=interval_minutes),
            args=[sessions],
            id=PURGE_JOB_ID,
            name="Purge expired sessions",
            replace_existing=True
        )

        scheduler.start()
        logger.info(f"Background scheduler started. Session cleanup scheduled every {interval_minutes} minutes.")


def stop_scheduler(scheduler: BackgroundScheduler):
    """
    Stop the background scheduler.

    This should be called when the FastAPI app shuts down.
    """
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Background scheduler stopped.")
