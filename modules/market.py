from modules.base import Module
from modules.calldata import Selector, encode_call
from modules.config import TRADE_GAS_LIMIT, logger
from modules.utils import get_rand_amount, random_sleep, to_base_units


class Market(Module):
    name = "Market"

    @property
    def settings(self):
        return self.config.trade

    def submit_order(self, pair, selector, amount, side) -> bool:
        token = self.config.find_token(pair.base_token)
        if not token:
            logger.error(f"{self.label} No faucet token found for {pair.base_token}")
            return False

        data = encode_call(selector, to_base_units(amount, token.decimals))

        outcome = self.wallet.transact(
            lambda: self.wallet.build_raw_tx(pair.contract, data, TRADE_GAS_LIMIT),
            tx_label=f"{self.label} {side} {amount:.4f} {pair.base_token} on {pair.name}",
        )
        return outcome.success

    def buy(self, pair) -> bool:
        """Function: buyMarket(uint256 baseAmount)"""
        amount = get_rand_amount(pair.min_buy, pair.max_buy)
        return self.submit_order(pair, Selector.BUY_MARKET, amount, "buy")

    def sell(self, pair) -> bool:
        """Function: sellMarket(uint256 baseAmount)"""
        amount = get_rand_amount(pair.min_sell, pair.max_sell)
        return self.submit_order(pair, Selector.SELL_MARKET, amount, "sell")

    def trade(self, pair) -> bool:
        """Buy then sell, a failed buy still lets the sell run."""
        bought = self.retry(lambda: self.buy(pair), f"buy on {pair.name}")

        random_sleep(self.settings.delay_min, self.settings.delay_max)

        sold = self.retry(lambda: self.sell(pair), f"sell on {pair.name}")

        return bought and sold

    def trade_all(self) -> bool:
        overall_success = True

        for index, pair in enumerate(self.settings.pairs):
            if not self.trade(pair):
                overall_success = False

            if index < len(self.settings.pairs) - 1:
                random_sleep(self.settings.delay_min, self.settings.delay_max)

        return overall_success
