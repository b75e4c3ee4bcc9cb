import asyncio
import logging
import os
import sys
from datetime import datetime

from telegram import Bot

from cafe_menu import (Clock, CycleOutcome, JsonStateStore, MenuClient, MenuMonitor,
                       MonitorConfig, PostSequencer, build_publisher)
from cafe_menu.errors import FetchError, ParseError


# Load environment variables from .env file if it exists
def load_env_file(path='.env'):
    if os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith('#') and '=' in line:
                        key, value = line.split('=', 1)
                        os.environ[key.strip()] = value.strip()
        except OSError as e:
            print(f'Warning: Error loading .env file: {e}')


LOG_FILE = 'menu_monitor.log'

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )

    if os.getenv('DEBUG', '').lower() in ['true', '1', 'yes']:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger('urllib3').setLevel(logging.INFO)  # Reduce HTTP noise
        logging.getLogger('aiohttp').setLevel(logging.INFO)  # Reduce HTTP noise

    try:
        sys.stdout.reconfigure(line_buffering=True)
        sys.stderr.reconfigure(line_buffering=True)
    except AttributeError:
        pass


def flush_logs():
    """Force flush all log handlers to ensure immediate write to disk"""
    for handler in logging.getLogger().handlers:
        if hasattr(handler, 'flush'):
            handler.flush()


async def send_critical_error_alert(config, error_message):
    """Send critical error alert to Telegram, when configured."""
    if not config.telegram_enabled:
        return
    try:
        message = (
            f"🚨 **Menu Monitor CRITICAL ERROR**\n\n"
            f"The menu monitor needs attention:\n{str(error_message)}\n\n"
            f"Time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n"
            f"Monitoring continues; check menu_monitor.log."
        )
        async with Bot(token=config.telegram_bot_token) as bot:
            await bot.send_message(
                chat_id=config.telegram_chat_id,
                text=message,
                parse_mode='Markdown'
            )
        logger.info("Critical error alert sent to Telegram")
    except Exception as e:
        logger.error(f"Failed to send critical error alert: {e}")


async def test_menu_connection(config, client):
    """Fetch today's menu once for startup validation"""
    try:
        menu = await client.fetch_menu(config.cafe_id)
    except (FetchError, ParseError) as e:
        logger.error(f'❌ Menu API check failed ({type(e).__name__}): {e}')
        logger.info(f'   - Check MENU_CAFE_ID ({config.cafe_id}) with: python list_cafes.py')
        logger.info(f'   - Verify {config.api_url} is reachable')
        return False

    cafe = menu.get_cafe(config.cafe_id)
    slots = ', '.join(f'{s.label} {s.start:%H:%M}' for s in cafe.meal_slots) or 'no meals today'
    logger.info(f'✅ Menu API connected: {cafe.name} (cafe {config.cafe_id}) - {slots}')
    return True


async def test_twitter_connection(publisher):
    username = await publisher.verify_credentials()
    if not username:
        logger.error('❌ Failed to authenticate with X API')
        logger.error('   Check X_API_KEY, X_API_SECRET, X_ACCESS_TOKEN and X_ACCESS_TOKEN_SECRET')
        return False
    logger.info(f'✅ X API connected as @{username}')
    return True


async def startup_validation(config, client, publisher):
    """Configuration and connectivity checks before the timer starts"""
    logger.info('🔍 Starting Menu Monitor Startup Validation...')

    problems = config.validate()
    if problems:
        for problem in problems:
            logger.error(f'❌ {problem}')
        logger.info('💡 Run: python quick_setup.py')
        return False
    logger.info('✅ Configuration valid')

    if not await test_menu_connection(config, client):
        return False

    if config.dry_run:
        logger.info('📝 Dry run enabled - posts will be logged, not tweeted')
    elif not await test_twitter_connection(publisher):
        return False

    if not config.telegram_enabled:
        logger.info('📱 Telegram alerts disabled (TELEGRAM_BOT_TOKEN/TELEGRAM_CHAT_ID not set)')
    return True


def log_heartbeat(monitor):
    counts = ', '.join(f'{name}={count}' for name, count in monitor.stats.items())
    logger.info(f'💓 Menu monitor heartbeat - {counts}')
    flush_logs()


class FailureTracker:
    """Counts consecutive failed cycles; asks for one alert per failure streak."""

    def __init__(self, threshold):
        self.threshold = max(1, threshold)
        self.consecutive = 0
        self.alerted = False

    def record(self, failed):
        if not failed:
            if self.alerted:
                logger.info(f'✅ Monitoring recovered after {self.consecutive} failed cycle(s)')
            self.consecutive = 0
            self.alerted = False
            return False

        self.consecutive += 1
        if self.consecutive >= self.threshold and not self.alerted:
            self.alerted = True
            return True
        return False


async def run_tick(monitor, config, tracker):
    """One timer tick; never lets an exception escape into the loop."""
    failure = None
    try:
        result = await monitor.run_cycle()
        if result.outcome == CycleOutcome.BUSY:
            return
        if result.outcome == CycleOutcome.FETCH_FAILED:
            failure = result.error
        if result.thread is not None:
            logger.info(f'📣 {result.meal_label}: {result.thread.posted_count}/{len(result.texts)} posts published')
    except Exception as e:
        error_type = type(e).__name__
        failure = f'{error_type}: {e}'
        logger.error(f'❌ Error in monitoring cycle ({error_type}): {e}')
        logger.info('🔄 Continuing monitoring after error...')
    finally:
        flush_logs()

    if tracker.record(failure is not None):
        await send_critical_error_alert(
            config, f'{tracker.consecutive} consecutive monitoring cycles failed. Last error: {failure}')


async def main():
    load_env_file()
    configure_logging()
    logger.info('🚀 Starting Cafe Menu Monitor...')

    try:
        config = MonitorConfig.from_env()
        clock = Clock(config.timezone)
    except ValueError as e:
        logger.error(f'❌ Invalid configuration: {e}')
        return

    publisher = build_publisher(config)

    async with MenuClient(config.api_url, timeout=config.request_timeout) as client:
        if not await startup_validation(config, client, publisher):
            logger.error('❌ Startup validation failed. Exiting.')
            return

        monitor = MenuMonitor(
            config=config,
            fetcher=client,
            sequencer=PostSequencer(publisher, abort_on_failure=config.abort_thread_on_failure),
            store=JsonStateStore(config.state_file),
            clock=clock,
        )

        logger.info(f'Monitoring cafe {config.cafe_id}: polling every {config.polling_interval_seconds}s, '
                    f'meal window ±{config.window_minutes} min')
        flush_logs()

        ticks_per_heartbeat = max(1, int(config.heartbeat_minutes * 60 / config.polling_interval_seconds))
        tick_count = 0
        pending = set()
        tracker = FailureTracker(config.alert_after_failures)

        try:
            while True:
                # schedule without awaiting; MenuMonitor skips ticks while a cycle is in flight
                task = asyncio.create_task(run_tick(monitor, config, tracker))
                pending.add(task)
                task.add_done_callback(pending.discard)

                await asyncio.sleep(config.polling_interval_seconds)
                tick_count += 1
                if tick_count >= ticks_per_heartbeat:
                    log_heartbeat(monitor)
                    tick_count = 0
        except asyncio.CancelledError:
            logger.info('🛑 Monitoring task cancelled')
        finally:
            for task in list(pending):
                task.cancel()
            logger.info('✅ Cafe Menu Monitor shutdown complete')
            flush_logs()


if __name__ == '__main__':
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info('🛑 Monitoring stopped by user (Ctrl+C)')
