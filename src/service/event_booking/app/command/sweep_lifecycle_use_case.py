"""
Lifecycle sweep

Events and bookings have no timers of their own. Whoever is about to read or
mutate them first calls `SweepLifecycleUseCase.execute()`, which moves
published events whose end time has passed to `completed` and then does the
same for the confirmed bookings of any event that has ended.

The sweep never fails the caller: errors are logged and reported through
`SweepResult.failed`.
"""

from datetime import datetime, timezone
from typing import List, Optional

import anyio
import attrs

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo


@attrs.define(frozen=True)
class SweepResult:
    completed_event_ids: List[int] = attrs.field(factory=list)
    completed_booking_count: int = 0
    failed: bool = False


class SweepLifecycleUseCase:
    def __init__(
        self,
        *,
        event_command_repo: IEventCommandRepo,
        booking_command_repo: IBookingCommandRepo,
    ) -> None:
        self.event_command_repo = event_command_repo
        self.booking_command_repo = booking_command_repo

    @Logger.io
    async def execute(self, now: Optional[datetime] = None) -> SweepResult:
        now = now or datetime.now(timezone.utc)
        try:
            event_ids = await self.event_command_repo.complete_ended_events(now)
            booking_count = await self.booking_command_repo.complete_bookings_for_ended_events(now)
        except Exception as e:
            Logger.base.opt(exception=e).error(f'🧹 [SWEEP] Lifecycle sweep failed: {e}')
            return SweepResult(failed=True)

        if event_ids or booking_count:
            Logger.base.info(
                f'🧹 [SWEEP] Completed events {event_ids} and {booking_count} bookings'
            )
        return SweepResult(completed_event_ids=event_ids, completed_booking_count=booking_count)

    async def run_periodically(self, interval_seconds: float) -> None:
        """Background loop for the application lifespan, cancelled on shutdown"""
        Logger.base.info(f'🧹 [SWEEP] Periodic sweep every {interval_seconds}s')
        while True:
            await self.execute()
            await anyio.sleep(interval_seconds)
