#!/usr/bin/env python3
"""
Monitor configuration from environment variables.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

from .client import DEFAULT_MENU_URL
from .formatter import DEFAULT_CELEBRATION_PHRASE, DEFAULT_CELEBRATION_SUFFIX
from .guard import DEFAULT_STATE_FILE

TRUE_VALUES = ('true', '1', 'yes')

X_CREDENTIAL_VARS = ['X_API_KEY', 'X_API_SECRET', 'X_ACCESS_TOKEN', 'X_ACCESS_TOKEN_SECRET']


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in TRUE_VALUES


@dataclass
class MonitorConfig:
    cafe_id: int = 224
    api_url: str = DEFAULT_MENU_URL
    location_name: Optional[str] = None
    timezone: Optional[str] = None
    window_minutes: int = 60
    state_file: str = DEFAULT_STATE_FILE
    celebration_phrase: Optional[str] = DEFAULT_CELEBRATION_PHRASE
    celebration_suffix: str = DEFAULT_CELEBRATION_SUFFIX
    dry_run: bool = False
    abort_thread_on_failure: bool = False
    request_timeout: float = 15.0
    polling_interval_seconds: int = 60
    heartbeat_minutes: int = 120
    alert_after_failures: int = 5

    x_api_key: Optional[str] = None
    x_api_secret: Optional[str] = None
    x_access_token: Optional[str] = None
    x_access_token_secret: Optional[str] = None

    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "MonitorConfig":
        """
        Read configuration from the environment.

        Raises:
            ValueError: If a numeric variable is not a number
        """
        return cls(
            cafe_id=int(os.getenv('MENU_CAFE_ID', '224')),
            api_url=os.getenv('MENU_API_URL', DEFAULT_MENU_URL),
            location_name=os.getenv('MENU_LOCATION_NAME') or None,
            timezone=os.getenv('MENU_TIMEZONE') or None,
            window_minutes=int(os.getenv('MENU_WINDOW_MINUTES', '60')),
            state_file=os.getenv('MENU_STATE_FILE', DEFAULT_STATE_FILE),
            celebration_phrase=os.getenv('MENU_CELEBRATION_PHRASE', DEFAULT_CELEBRATION_PHRASE) or None,
            celebration_suffix=os.getenv('MENU_CELEBRATION_SUFFIX', DEFAULT_CELEBRATION_SUFFIX),
            dry_run=_env_flag('MENU_DRY_RUN'),
            abort_thread_on_failure=_env_flag('MENU_ABORT_THREAD_ON_FAILURE'),
            request_timeout=float(os.getenv('MENU_REQUEST_TIMEOUT_SECONDS', '15')),
            polling_interval_seconds=int(os.getenv('POLLING_INTERVAL_SECONDS', '60')),
            heartbeat_minutes=int(os.getenv('HEARTBEAT_MINUTES', '120')),
            alert_after_failures=int(os.getenv('ALERT_AFTER_FAILURES', '5')),
            x_api_key=os.getenv('X_API_KEY'),
            x_api_secret=os.getenv('X_API_SECRET'),
            x_access_token=os.getenv('X_ACCESS_TOKEN'),
            x_access_token_secret=os.getenv('X_ACCESS_TOKEN_SECRET'),
            telegram_bot_token=os.getenv('TELEGRAM_BOT_TOKEN'),
            telegram_chat_id=os.getenv('TELEGRAM_CHAT_ID'),
        )

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    def missing_credentials(self) -> List[str]:
        values = {
            'X_API_KEY': self.x_api_key,
            'X_API_SECRET': self.x_api_secret,
            'X_ACCESS_TOKEN': self.x_access_token,
            'X_ACCESS_TOKEN_SECRET': self.x_access_token_secret,
        }
        return [name for name in X_CREDENTIAL_VARS if not values[name]]

    def validate(self) -> List[str]:
        """Return a list of configuration problems; empty when the config is usable."""
        problems = []
        if not self.dry_run:
            missing = self.missing_credentials()
            if missing:
                problems.append(f"Missing X credentials: {', '.join(missing)}")
        if self.cafe_id < 0:
            problems.append(f"Invalid cafe id: {self.cafe_id}")
        if self.polling_interval_seconds <= 0:
            problems.append(f"Polling interval must be positive: {self.polling_interval_seconds}")
        if self.window_minutes <= 0:
            problems.append(f"Meal window must be positive: {self.window_minutes}")
        if self.request_timeout <= 0:
            problems.append(f"Request timeout must be positive: {self.request_timeout}")
        if self.alert_after_failures <= 0:
            problems.append(f"ALERT_AFTER_FAILURES must be positive: {self.alert_after_failures}")
        if not self.state_file:
            problems.append("MENU_STATE_FILE is empty")
        return problems
