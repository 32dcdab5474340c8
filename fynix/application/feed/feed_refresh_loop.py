"""
Background feed refresh.

While an onboarded profile is active, an APScheduler interval job asks the
fact generator for one new fact and prepends it to the feed. A tick that
fires while the previous request is still in flight is dropped.
"""

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from fynix.application.feed.feed_fact_generator import (
    DEFAULT_GRADE,
    DEFAULT_INTERESTS,
    FeedFactGenerator,
)
from fynix.application.state.state_store import StateStore
from fynix.domain.app_state import AppState

logger = structlog.get_logger(__name__)

FEED_REFRESH_JOB_ID = "feed_refresh"
DEFAULT_INTERVAL_SECONDS = 60.0

TriggerKey = tuple[str, str, str, str]


def trigger_key(state: AppState) -> TriggerKey | None:
    """Inputs that shape the generated facts; None when the loop must not run."""
    user = state.user
    if user is None or not user.onboarded:
        return None
    return (
        user.grade or DEFAULT_GRADE,
        user.interests or DEFAULT_INTERESTS,
        state.preferences.language.value,
        state.preferences.ai_url,
    )


class FeedRefreshLoop:
    def __init__(
        self,
        store: StateStore,
        generator: FeedFactGenerator,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        scheduler: AsyncIOScheduler | None = None,
    ) -> None:
        self.store = store
        self.generator = generator
        self.interval_seconds = interval_seconds
        self.scheduler = scheduler or AsyncIOScheduler()
        self._busy = False
        self._active_key: TriggerKey | None = None

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def running(self) -> bool:
        return self._active_key is not None

    def start(self) -> bool:
        """
        Schedule the refresh job for the current profile.

        Must be called from within a running event loop.

        Returns:
            False when no onboarded profile is active
        """
        key = trigger_key(self.store.snapshot())
        if key is None:
            return False

        if not self.scheduler.running:
            self.scheduler.start()
        self.scheduler.add_job(
            self.tick,
            "interval",
            seconds=self.interval_seconds,
            id=FEED_REFRESH_JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self._active_key = key
        logger.info("feed_refresh_started", interval_seconds=self.interval_seconds)
        return True

    def stop(self) -> None:
        if self.scheduler.get_job(FEED_REFRESH_JOB_ID) is not None:
            self.scheduler.remove_job(FEED_REFRESH_JOB_ID)
            logger.info("feed_refresh_stopped")
        self._active_key = None

    def restart_if_changed(self) -> None:
        """Tear the job down and set it up again when its inputs changed."""
        key = trigger_key(self.store.snapshot())
        if key == self._active_key:
            return
        self.stop()
        if key is not None:
            self.start()

    def shutdown(self) -> None:
        self.stop()
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

    async def tick(self) -> bool:
        """
        Fetch one fact and prepend it to the feed.

        Returns:
            True if a fact was added
        """
        if self._busy:
            logger.debug("feed_refresh_skipped_busy")
            return False

        self._busy = True
        try:
            state = self.store.snapshot()
            key = trigger_key(state)
            if key is None:
                return False

            grade, interests, language, _ = key
            fact = await self.generator.generate(
                grade=grade, interests=interests, language=language
            )
            if fact is None:
                return False

            self.store.add_feed_items([fact], top=True)
            logger.info("feed_fact_prepended", title=fact.title)
            return True
        except Exception as e:
            logger.warning("feed_refresh_failed", error=str(e))
            return False
        finally:
            self._busy = False
