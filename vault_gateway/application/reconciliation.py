"""Reconciliation loop - keeps the held record in step with the record store"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from vault_gateway.application.session import SessionManager
from vault_gateway.domain.exceptions import DomainException
from vault_gateway.domain.verifier import find_by_identity
from vault_gateway.infrastructure.clients.record_store import RecordStoreClient
from vault_gateway.infrastructure.observability.metrics import record_sync
from vault_gateway.presentation.renderer import NullRenderer, ViewRenderer

logger = logging.getLogger(__name__)


class SyncOutcome(str, Enum):
    UPDATED = "updated"
    NOT_FOUND = "not_found"
    FAILED = "failed"
    SKIPPED_ANONYMOUS = "skipped_anonymous"
    SKIPPED_BUSY = "skipped_busy"
    DISCARDED = "discarded"  # session changed while the fetch was in flight


class ReconciliationLoop:
    """
    Fixed-period re-fetch of the signed-in user's record.

    Ticks never overlap: run() awaits each tick before sleeping again, and
    a tick triggered while another is in flight is skipped. Fetch failures
    leave the held record untouched; the loop degrades to stale data and
    keeps going.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        client: RecordStoreClient,
        interval_seconds: float = 30.0,
        renderer: Optional[ViewRenderer] = None,
    ):
        self.session_manager = session_manager
        self.client = client
        self.interval_seconds = interval_seconds
        self.renderer = renderer or NullRenderer()
        self._busy = False
        self._task: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> SyncOutcome:
        """Run one reconciliation pass. Never raises domain errors."""
        try:
            outcome = await self._tick()
        except Exception:
            record_sync("error")
            raise
        record_sync(outcome.value)
        return outcome

    async def _tick(self) -> SyncOutcome:
        if not self.session_manager.is_authenticated:
            return SyncOutcome.SKIPPED_ANONYMOUS
        if self._busy:
            logger.debug("Previous sync still in flight, skipping tick")
            return SyncOutcome.SKIPPED_BUSY

        self._busy = True
        try:
            identity_key = self.session_manager.identity_key
            try:
                records = await self.client.fetch_all()
            except DomainException as e:
                logger.warning(
                    "Sync temporarily interrupted: %s", e,
                    extra={"step": "sync", "identity_key": identity_key},
                )
                return SyncOutcome.FAILED

            if self.session_manager.identity_key != identity_key:
                logger.info("Session changed during sync, discarding fetched data")
                return SyncOutcome.DISCARDED

            fresh = find_by_identity(records, identity_key)
            if fresh is None:
                logger.warning(
                    "Held identity missing from vault, keeping current record",
                    extra={"step": "sync", "identity_key": identity_key},
                )
                return SyncOutcome.NOT_FOUND

            self.session_manager.replace_record(fresh)
            self.renderer.render(fresh)
            logger.info("Vault sync complete", extra={"step": "sync", "identity_key": identity_key})
            return SyncOutcome.UPDATED
        finally:
            self._busy = False

    async def run(self) -> None:
        """Tick every interval_seconds until cancelled; the first tick comes one interval in"""
        logger.info("Reconciliation loop started (interval=%.1fs)", self.interval_seconds)
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.tick()
            except Exception as e:
                logger.error("Unexpected error in reconciliation loop: %s", e, exc_info=True)

    def start(self) -> asyncio.Task:
        """Schedule run() on the current event loop (idempotent)"""
        if not self.running:
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """Cancel the background task, used on application shutdown"""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Reconciliation loop stopped")
