#!/usr/bin/env python3
"""
Cafe Menu Monitor
Announces upcoming cafeteria meals as X/Twitter threads.
"""

from .classifier import ClassifiedItem, classify_item, classify_station, derive_notices
from .client import MenuClient
from .clock import Clock, FixedClock
from .config import MonitorConfig
from .errors import FetchError, MenuMonitorError, ParseError, PersistenceError, PublishError
from .formatter import MenuFormatter
from .guard import JsonStateStore, should_post
from .models import Cafe, Item, MealSlot, MenuResponse, Station
from .orchestrator import CycleOutcome, CycleResult, MenuMonitor
from .publisher import DryRunPublisher, Publisher, TweepyPublisher
from .sequencer import PostSequencer, ThreadResult
from .time_window import find_near_meal, find_near_meal_index

__version__ = "1.0.0"

__all__ = [
    'Cafe', 'Item', 'MealSlot', 'MenuResponse', 'Station',
    'ClassifiedItem', 'classify_item', 'classify_station', 'derive_notices',
    'MenuClient', 'Clock', 'FixedClock', 'MonitorConfig',
    'MenuMonitorError', 'FetchError', 'ParseError', 'PublishError', 'PersistenceError',
    'MenuFormatter', 'JsonStateStore', 'should_post',
    'CycleOutcome', 'CycleResult', 'MenuMonitor',
    'Publisher', 'TweepyPublisher', 'DryRunPublisher',
    'PostSequencer', 'ThreadResult',
    'find_near_meal', 'find_near_meal_index',
]


def build_publisher(config: MonitorConfig) -> Publisher:
    """Pick the dry-run or X publisher for a configuration."""
    if config.dry_run:
        return DryRunPublisher()
    return TweepyPublisher(
        consumer_key=config.x_api_key,
        consumer_secret=config.x_api_secret,
        access_token=config.x_access_token,
        access_token_secret=config.x_access_token_secret,
        timeout=config.request_timeout,
    )
