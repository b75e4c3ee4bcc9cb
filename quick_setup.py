#!/usr/bin/env python3
"""
Quick setup script for the Cafe Menu Monitor
Creates .env file with required credentials
"""

import os
import sys


def prompt_required(message):
    while True:
        value = input(message).strip()
        if value:
            return value
        print("Value cannot be empty")


def build_env_lines(env_vars):
    lines = ["# Cafe Menu Monitor configuration"]
    for key, value in env_vars.items():
        lines.append(f"{key}={value}")
    return "\n".join(lines) + "\n"


def create_env_file():
    """Create .env file with user input"""
    print("🍽️ Cafe Menu Monitor Quick Setup")
    print("=" * 50)

    if os.path.exists('.env'):
        response = input("⚠️  .env file already exists. Overwrite? (y/N): ").strip().lower()
        if response not in ['y', 'yes']:
            print("Setup cancelled.")
            return False

    env_vars = {}

    print("\n🏫 Cafe Setup:")
    print("Run 'python list_cafes.py' to find your cafe id.")
    cafe_id = input("Enter the cafe id (default 224): ").strip() or '224'
    if not cafe_id.isdigit():
        print("❌ Cafe id must be a number")
        return False
    env_vars['MENU_CAFE_ID'] = cafe_id

    location = input("Header name for the cafe (blank = name from the menu): ").strip()
    if location:
        env_vars['MENU_LOCATION_NAME'] = location

    timezone = input("Timezone, e.g. America/Los_Angeles (blank = system local): ").strip()
    if timezone:
        env_vars['MENU_TIMEZONE'] = timezone

    dry_run = input("\nStart in dry-run mode (log posts instead of tweeting)? (y/N): ").strip().lower()
    if dry_run in ['y', 'yes']:
        env_vars['MENU_DRY_RUN'] = 'true'
    else:
        print("\n📝 X API Setup:")
        print("1. Go to https://developer.twitter.com/")
        print("2. Create an app with Read and Write permissions")
        print("3. Generate the API key/secret and the access token/secret")
        env_vars['X_API_KEY'] = prompt_required("\nEnter your X API key: ")
        env_vars['X_API_SECRET'] = prompt_required("Enter your X API secret: ")
        env_vars['X_ACCESS_TOKEN'] = prompt_required("Enter your X access token: ")
        env_vars['X_ACCESS_TOKEN_SECRET'] = prompt_required("Enter your X access token secret: ")

    print("\n📱 Telegram crash alerts (optional, press Enter to skip):")
    bot_token = input("Telegram Bot Token: ").strip()
    if bot_token:
        env_vars['TELEGRAM_BOT_TOKEN'] = bot_token
        env_vars['TELEGRAM_CHAT_ID'] = prompt_required("Telegram Chat ID: ")

    interval = input("\nPolling interval in seconds (default 60): ").strip() or '60'
    if not interval.isdigit() or int(interval) <= 0:
        print("❌ Polling interval must be a positive number")
        return False
    env_vars['POLLING_INTERVAL_SECONDS'] = interval

    try:
        with open('.env', 'w', encoding='utf-8') as f:
            f.write(build_env_lines(env_vars))
    except OSError as e:
        print(f"❌ Error creating .env file: {e}")
        return False

    print("\n✅ .env file created")
    print("Next: python monitor_menu_polling.py")
    return True


if __name__ == "__main__":
    try:
        sys.exit(0 if create_env_file() else 1)
    except KeyboardInterrupt:
        print("\nSetup cancelled.")
        sys.exit(1)
