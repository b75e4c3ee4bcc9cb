#!/usr/bin/env python3
"""
One polling cycle: fetch the menu, find a meal starting soon, build the thread,
check it was not already posted, post it and remember it.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Dict, List, Optional

from .classifier import classify_station
from .clock import Clock
from .config import MonitorConfig
from .errors import FetchError, ParseError, PersistenceError
from .formatter import MenuFormatter
from .guard import JsonStateStore, should_post
from .sequencer import PostSequencer, ThreadResult
from .time_window import find_near_meal

logger = logging.getLogger(__name__)


class CycleOutcome(Enum):
    NO_MEAL_NEAR = "no_meal_near"
    ALREADY_POSTED = "already_posted"
    POSTED = "posted"
    FETCH_FAILED = "fetch_failed"
    BUSY = "busy"


@dataclass
class CycleResult:
    outcome: CycleOutcome
    meal_label: Optional[str] = None
    texts: List[str] = field(default_factory=list)
    thread: Optional[ThreadResult] = None
    error: Optional[str] = None


class MenuMonitor:
    """
    Runs polling cycles against injected collaborators.

    Args:
        config: Monitor configuration
        fetcher: Object with ``async fetch_menu(cafe_id) -> MenuResponse``
        sequencer: Thread publisher
        store: Last-posted-meal store
        clock: Source of the current time and date
        formatter: Thread text builder; built from config when omitted
    """

    def __init__(self, config: MonitorConfig, fetcher, sequencer: PostSequencer,
                 store: JsonStateStore, clock: Clock, formatter: Optional[MenuFormatter] = None):
        self.config = config
        self.fetcher = fetcher
        self.sequencer = sequencer
        self.store = store
        self.clock = clock
        self.formatter = formatter or MenuFormatter(
            celebration_phrase=config.celebration_phrase,
            celebration_suffix=config.celebration_suffix,
        )
        self.window = timedelta(minutes=config.window_minutes)
        self._busy = False
        self.stats: Dict[str, int] = {outcome.value: 0 for outcome in CycleOutcome}

    @property
    def busy(self) -> bool:
        return self._busy

    async def run_cycle(self) -> CycleResult:
        if self._busy:
            logger.warning('⏳ Previous cycle still running, skipping this tick')
            result = CycleResult(CycleOutcome.BUSY)
        else:
            self._busy = True
            try:
                result = await self._run_cycle()
            finally:
                self._busy = False

        self.stats[result.outcome.value] += 1
        return result

    async def _run_cycle(self) -> CycleResult:
        cafe_id = self.config.cafe_id
        try:
            menu = await self.fetcher.fetch_menu(cafe_id)
            cafe = menu.get_cafe(cafe_id)
        except (FetchError, ParseError) as e:
            logger.error(f'❌ Menu fetch failed ({type(e).__name__}): {e}')
            logger.info('🔄 Will retry on next polling cycle')
            return CycleResult(CycleOutcome.FETCH_FAILED, error=str(e))

        now = self.clock.now_time()
        slot = find_near_meal(cafe.meal_slots, now, self.window)
        if slot is None:
            logger.debug(f'⏰ No meal near {now:%H:%M} ({len(cafe.meal_slots)} slot(s) today)')
            return CycleResult(CycleOutcome.NO_MEAL_NEAR)

        logger.debug(f'🍽️ Near meal: {slot.label} ({slot.start:%H:%M}-{slot.end:%H:%M})')
        station_items = [(station.label, classify_station(station, menu)) for station in slot.stations]
        location = self.config.location_name or cafe.name
        texts = self.formatter.format_menu(slot.label, station_items, location, self.clock.today())

        last_posted = self.store.read_last_meal()
        if not should_post(last_posted, slot.label):
            logger.debug(f'🔁 {slot.label} already posted, nothing to do')
            return CycleResult(CycleOutcome.ALREADY_POSTED, meal_label=slot.label, texts=texts)

        logger.info(f'🍽️ Posting {slot.label} menu for {location}: {len(texts)} post(s)')
        thread = await self.sequencer.publish_thread(texts)
        if thread.failures:
            logger.warning(f'⚠️ {slot.label} thread incomplete: '
                           f'{thread.posted_count} posted, {thread.failed_count} failed')

        try:
            self.store.write_last_meal(slot.label)
        except PersistenceError as e:
            logger.error(f'❌ Could not save last posted meal: {e}')

        return CycleResult(CycleOutcome.POSTED, meal_label=slot.label, texts=texts, thread=thread)
