import sys
import time
from datetime import datetime, timedelta
from random import shuffle

import questionary
from questionary import Style
from rich.console import Console
from rich.panel import Panel

from models.config import ConfigError
from modules.actions import ActionHandler
from modules.config import load_config, logger
from modules.utils import sleep


def load_keys(file_path):
    with open(file_path) as f:
        keys = [row.strip() for row in f if row.strip() and not row.startswith("#")]
    return keys


def load_proxies(file_path):
    try:
        with open(file_path) as file:
            rows = [row.strip() for row in file]
    except FileNotFoundError:
        logger.warning(f"Proxy file not found: {file_path}, running without proxies")
        return []

    return [
        row if "://" in row else f"http://{row}"
        for row in rows
        if row and not row.startswith("#")
    ]


def shuffle_wallets(keys, proxies):
    """Shuffle keys, keeping each key with its proxy (None past the proxy list)."""
    pairs = [
        (key, proxies[i] if i < len(proxies) else None) for i, key in enumerate(keys)
    ]
    shuffle(pairs)
    return [key for key, _ in pairs], [proxy for _, proxy in pairs]


def select_action(choices):
    style = Style([("pointer", "fg:#2F80ED"), ("highlighted", "fg:#2F80ED bold")])
    return questionary.select(
        "Select an action to perform:", choices=choices, style=style
    ).ask()


def display_banner(name):
    Console().print(
        Panel.fit(f"[bold magenta]{name}[/bold magenta]", border_style="bright_blue")
    )
    print()


def wait_for_next_run(running_delay_ms):
    """Sleeps `running_delay_ms` before the next cycle starts."""
    time_to_wait = running_delay_ms / 1000
    target_time = datetime.now() + timedelta(seconds=time_to_wait)

    hours, remainder = divmod(time_to_wait, 3600)
    minutes, _ = divmod(remainder, 60)
    logger.info(
        f"Next run at {target_time.strftime('%Y-%m-%d %H:%M')} ({int(hours)} hours, {int(minutes)} minutes)"
    )
    time.sleep(time_to_wait)
    logger.info("Starting next scheduled run\n")


def process_wallets(keys, action_callback, config, loop=False):
    while True:
        for index, key in enumerate(keys, start=1):
            try:
                action_callback(key, index, len(keys))

            except Exception as error:
                logger.error(
                    f"[{index}/{len(keys)}] Error processing wallet: {error} \n"
                )

            # Sleep between wallets
            if index < len(keys):
                sleep(config.bot.default_delay_min, config.bot.default_delay_max)

        logger.success("All wallet operations completed")

        if not loop:
            break

        wait_for_next_run(config.bot.running_delay)


def main():
    try:
        config = load_config("config.yaml")
    except ConfigError as error:
        logger.error(f"Failed to load configuration: {error}")
        sys.exit(1)

    try:
        keys = load_keys(config.bot.private_key_path)
    except FileNotFoundError:
        logger.error(f"Private key file not found: {config.bot.private_key_path}")
        sys.exit(1)

    if not keys:
        logger.error(f"{config.bot.private_key_path} is empty")
        sys.exit(1)

    proxies = load_proxies(config.bot.proxy_path) if config.bot.use_proxy else []

    if config.bot.shuffle_wallets:
        keys, proxies = shuffle_wallets(keys, proxies)

    display_banner(config.bot.name)
    logger.info(f"Loaded {len(keys)} wallets, {len([p for p in proxies if p])} proxies")

    action_handler = ActionHandler(keys, proxies, config)
    action_map = action_handler.get_action_map()

    action = select_action(list(action_map))
    if action not in action_map:
        return

    if action == ActionHandler.balances_option:
        action_map[action]()
    else:
        loop = action == ActionHandler.run_all_option
        process_wallets(keys, action_map[action], config, loop=loop)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.warning("Cancelled by the user")
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}")
