import json
from datetime import datetime
from pathlib import Path
from sys import stderr

import yaml
from loguru import logger

from models.config import Config, ConfigError

logger.remove()
logger.add(stderr, format="<white>{time:HH:mm:ss}</white> | <level>{message}</level>")
logger.add(
    f"reports/debug-{datetime.today().strftime('%Y-%m-%d')}.log",
    format="<white>{time:HH:mm:ss}</white> | <level>{message}</level>",
)

ROOT_DIR = Path(__file__).resolve().parent.parent

# Dextr Exchange API
DEXTR_API_URL = "https://app.dextr.exchange/worker/api"
DEXTR_ORIGIN = "https://app.dextr.exchange"
IP_CHECK_URL = "https://httpbin.org/ip"

# Gas
FALLBACK_GAS_PRICE = 1_500_000_000  # 1.5 gwei
GAS_ESTIMATE_BUFFER = 120  # percent of the node estimate
APPROVE_GAS_LIMIT = 100_000
DEPOSIT_GAS_LIMIT = 300_000
STAKE_GAS_LIMIT = 300_000
UNSTAKE_GAS_LIMIT = 200_000
TRADE_GAS_LIMIT = 600_000
LIQUIDITY_GAS_LIMIT = 700_000

TX_TIMEOUT = 400  # seconds to wait for a receipt

# Fixed stake amounts in whole tokens, percentages from config are not applied
STAKE_AMOUNT = 300
UNSTAKE_AMOUNT = 50

# Pause between approve and deposit
APPROVE_PAUSE = (2, 5)

# ABI
with open(ROOT_DIR / "data" / "abi" / "ERC20.json") as f:
    ERC20_ABI = json.load(f)


def load_config(path="config.yaml") -> Config:
    """Read the YAML config file into an immutable Config."""
    try:
        with open(path, encoding="utf-8") as file:
            tree = yaml.safe_load(file)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except yaml.YAMLError as error:
        raise ConfigError(f"Failed to parse {path}: {error}")

    return Config.from_dict(tree)
