import csv
import os
import random
import time
from datetime import datetime
from decimal import Decimal

from tqdm import tqdm

from modules.config import logger


def mask_address(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"


def to_base_units(amount, decimals: int) -> int:
    """Convert a human readable amount into integer base units."""
    return int(Decimal(str(amount)) * 10**decimals)


def from_base_units(amount: int, decimals: int) -> Decimal:
    return Decimal(amount) / 10**decimals


def get_rand_amount(min_amount, max_amount) -> float:
    return random.uniform(min_amount, max_amount)


def get_delay(min_time, max_time) -> int:
    """Random whole number of seconds in [min_time, max_time]."""
    return random.randint(int(min_time), int(max_time))


def random_sleep(min_time, max_time) -> int:
    duration = get_delay(min_time, max_time)
    time.sleep(duration)
    return duration


def sleep(sleep_time, to_sleep=None, label="Sleep until next account", new_line=True):
    if to_sleep is not None:
        x = get_delay(sleep_time, to_sleep)
    else:
        x = sleep_time

    desc = datetime.now().strftime("%H:%M:%S")

    for _ in tqdm(
        range(x), desc=desc, bar_format=f"{{desc}} | {label} {{n_fmt}}/{{total_fmt}}"
    ):
        time.sleep(1)

    if new_line:
        print()  # new line break


def create_csv(path, mode, headers, data):
    directory = os.path.dirname(path)

    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)

    with open(path, mode, encoding="utf-8", newline="") as file:
        writer = csv.writer(file)

        if file.tell() == 0:
            writer.writerow(headers)
            logger.success(f"{path} created")

        writer.writerows(data)
