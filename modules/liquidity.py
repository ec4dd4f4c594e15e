from modules.base import Module
from modules.calldata import Selector, encode_call
from modules.config import LIQUIDITY_GAS_LIMIT, logger
from modules.utils import random_sleep, to_base_units


def min_amount(amount: int, slippage) -> int:
    return amount - amount * int(slippage) // 100


def build_liquidity_args(wallet, pair):
    amount1 = to_base_units(pair.amount1, pair.token1.decimals)
    amount2 = to_base_units(pair.amount2, pair.token2.decimals)

    efl = (
        wallet.to_checksum(pair.token1.address),
        amount1,
        min_amount(amount1, pair.slippage1),
        min_amount(amount2, pair.slippage2),
    )
    permit_tokens = [wallet.to_checksum(pair.token2.address)]
    min_prices = [to_base_units(pair.min_price, 18)]
    max_prices = [to_base_units(pair.max_price, 18)]

    return efl, permit_tokens, min_prices, max_prices


class Liquidity(Module):
    name = "Liquidity"

    @property
    def settings(self):
        return self.config.liquidity

    def add_liquidity(self, pair) -> bool:
        data = encode_call(
            Selector.ENABLE_FREE_LIQUIDITY, *build_liquidity_args(self.wallet, pair)
        )

        outcome = self.wallet.transact(
            lambda: self.wallet.build_raw_tx(
                self.settings.contract, data, LIQUIDITY_GAS_LIMIT, gas_multiplier=1.3
            ),
            tx_label=f"{self.label} add {pair.amount1} {pair.token1.symbol} / {pair.amount2} {pair.token2.symbol}",
        )
        return outcome.success

    def add_all(self) -> bool:
        overall_success = True

        for index, pair in enumerate(self.settings.pairs):
            logger.info(f"{self.label} Adding liquidity for {pair.name} pair")

            if not self.retry(lambda: self.add_liquidity(pair), f"add {pair.name}"):
                overall_success = False

            if index < len(self.settings.pairs) - 1:
                random_sleep(self.settings.delay_min, self.settings.delay_max)

        return overall_success
