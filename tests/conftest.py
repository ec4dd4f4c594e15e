import copy
from unittest.mock import MagicMock

import pytest
from web3 import Web3

from models.config import Config
from models.outcome import TxOutcome
from modules.config import logger

ADDRESS = Web3.to_checksum_address("0x19e7e376e7c213b7e7e7e46cc70a5dd086daff2a")

USDC = "0xdC2de190a921D846B35EB92d195c9c3D9C08d1C2"
WBNB = "0x0c55A5Ca96cedA5659D4f0E56707494274a98ae2"
DXTR = "0x62725D7f09B4dF9b2B1d62C63bdEB1fBf9693E76"

CONFIG_TREE = {
    "bot": {
        "name": "Test Bot",
        "useProxy": False,
        "defaultDelayMin": 1,
        "defaultDelayMax": 2,
        "runningDelay": 1000,
        "maxRetries": 2,
    },
    "network": {
        "chainId": 84532,
        "rpc": "https://sepolia.base.org",
        "blockExplorer": "https://base-sepolia.blockscout.com",
        "gasLimit": 500000,
        "gasPrice": None,
    },
    "faucet": {
        "enabled": True,
        "tokens": [
            {"symbol": "USDC", "contract": USDC, "amount": 6000, "decimals": 6},
            {"symbol": "wBNB", "contract": WBNB, "amount": 10, "decimals": 18},
            {"symbol": "DXTR", "contract": DXTR, "amount": 10000, "decimals": 18},
        ],
        "delayMin": 1,
        "delayMax": 2,
        "maxRetries": 3,
    },
    "deposit": {
        "enabled": True,
        "percentage": 20,
        "vaults": [
            {
                "symbol": "USDC",
                "contract": "0xF143934804C28e40CC3439283c12cEBcC6949131",
                "methodId": "0x609e7624",
            }
        ],
        "iterations": 1,
        "delayMin": 1,
        "delayMax": 2,
        "maxRetries": 3,
    },
    "stake": {
        "enabled": True,
        "contract": "0xB3e29778C2850EFe5957191b55E9a37AD8836E8a",
        "tokenVault": "0xFB9D5E8e8Eb1780031BC6c29279dFb9D9d3B155E",
        "iterations": 1,
        "delayMin": 1,
        "delayMax": 2,
        "maxRetries": 3,
    },
    "trade": {
        "enabled": True,
        "pairs": [
            {
                "name": "BNB/USDC",
                "contract": "0xC9f19663218CeAaeD2b4206Ed6E06978a8798f6a",
                "baseToken": "wBNB",
                "quoteToken": "USDC",
                "minBuy": 0.1,
                "maxBuy": 0.2,
                "minSell": 0.1,
                "maxSell": 0.2,
            }
        ],
        "iterations": 1,
        "delayMin": 1,
        "delayMax": 2,
        "maxRetries": 3,
    },
    "liquidity": {
        "enabled": True,
        "contract": "0x14A7A196Ea479fE57A5D3432aC557bEbD88Cb974",
        "pairs": [
            {
                "token1": {"symbol": "USDC", "address": USDC, "decimals": 6},
                "token2": {"symbol": "wBNB", "address": WBNB, "decimals": 18},
                "amount1": 90,
                "amount2": 0.7,
                "slippage1": 5,
                "slippage2": 5,
                "minPrice": 431.487,
                "maxPrice": 801.333,
            }
        ],
        "iterations": 1,
        "delayMin": 1,
        "delayMax": 2,
        "maxRetries": 3,
    },
}


def make_tree(**sections) -> dict:
    """Copy of CONFIG_TREE with whole sections or section keys overridden."""
    tree = copy.deepcopy(CONFIG_TREE)
    for name, values in sections.items():
        tree[name] = {**tree.get(name, {}), **values}
    return tree


def make_config(**sections) -> Config:
    return Config.from_dict(make_tree(**sections))


def make_wallet(balance=0, outcome=None):
    """A wallet double that records every transaction it is asked to send."""
    wallet = MagicMock()
    wallet.address = ADDRESS
    wallet.label = "[1/1] 0x19E7...ff2A |"
    wallet.proxy = None
    wallet.to_checksum.side_effect = Web3.to_checksum_address
    wallet.get_token_balance.return_value = balance
    wallet.transact.return_value = outcome if outcome is not None else TxOutcome(True, "0xabc", 1)
    wallet.approve.return_value = TxOutcome(True, "0xdef", 1)
    return wallet


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    slept = []
    monkeypatch.setattr("time.sleep", lambda seconds: slept.append(seconds))
    return slept


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
