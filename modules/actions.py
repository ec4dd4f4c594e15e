from datetime import datetime

from rich import print as rich_print
from rich.table import Table

from models.wallet import Wallet
from modules.config import logger
from modules.pipeline import WalletPipeline
from modules.utils import create_csv, from_base_units


class ActionHandler:
    """
    Centralized handler for mapping user actions to their corresponding functions.
    """

    run_all_option = "Run all enabled modules"
    balances_option = "Check balances"

    def __init__(self, keys, proxies, config):
        self.keys = keys
        self.proxies = proxies
        self.config = config

    def get_action_map(self):
        return {
            self.run_all_option: self.run_all,
            "Register on Dextr": lambda key, idx, total: self.run_single(
                key, idx, total, "register"
            ),
            "Claim faucets": lambda key, idx, total: self.run_single(
                key, idx, total, "faucet"
            ),
            "Deposit to vaults": lambda key, idx, total: self.run_single(
                key, idx, total, "deposit"
            ),
            "Stake / Unstake": lambda key, idx, total: self.run_single(
                key, idx, total, "stake"
            ),
            "Trade pairs": lambda key, idx, total: self.run_single(
                key, idx, total, "trade"
            ),
            "Add liquidity": lambda key, idx, total: self.run_single(
                key, idx, total, "liquidity"
            ),
            self.balances_option: self.check_balances,
        }

    def get_proxy(self, index):
        """Proxy N belongs to key N, keys past the end of the list go direct"""
        if self.config.bot.use_proxy and index <= len(self.proxies):
            return self.proxies[index - 1]
        return None

    def get_wallet(self, key, index, total):
        return Wallet(
            key, self.config.network, f"[{index}/{total}]", self.get_proxy(index)
        )

    def get_pipeline(self, key, index, total):
        wallet = self.get_wallet(key, index, total)
        logger.info(f"{wallet.label} Starting operations")
        return WalletPipeline(wallet, self.config)

    def run_all(self, key, index, total):
        results = self.get_pipeline(key, index, total).run()
        return all(results.values())

    def run_single(self, key, index, total, category):
        pipeline = self.get_pipeline(key, index, total)

        if not pipeline.is_enabled(category):
            logger.warning(f"{pipeline.label} {category} is disabled in config.yaml\n")
            return False

        results = pipeline.run(categories=(category,))
        return all(results.values())

    def check_balances(self):
        logger.info(f"Checking balances of {len(self.keys)} wallets...\n")
        tokens = self.config.faucet.tokens

        table = Table(title="Balances")
        table.add_column("№")
        table.add_column("Wallet")
        table.add_column("Txns")
        table.add_column("ETH")
        for token in tokens:
            table.add_column(token.symbol)

        rows = []
        for index, key in enumerate(self.keys, start=1):
            wallet = self.get_wallet(key, index, len(self.keys))

            native = wallet.read_balance()
            tx_count = wallet.read_tx_count()
            row = [
                index,
                wallet.address,
                tx_count.value if tx_count.available else "n/a",
                f"{from_base_units(native.value, 18):.6f}" if native.available else "n/a",
            ]
            for token in tokens:
                reading = wallet.read_balance(token.contract)
                row.append(
                    f"{from_base_units(reading.value, token.decimals):.4f}"
                    if reading.available
                    else "n/a"
                )

            table.add_row(*[str(value) for value in row])
            rows.append(row)

        rich_print(table)

        date = datetime.today().strftime("%Y-%m-%d")
        headers = ["№", "Wallet", "TX count", "ETH", *[t.symbol for t in tokens]]
        create_csv(f"reports/balances-{date}.csv", "a", headers, rows)
