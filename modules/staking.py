from modules.base import Module
from modules.calldata import Selector, encode_call
from modules.config import (
    STAKE_AMOUNT,
    STAKE_GAS_LIMIT,
    UNSTAKE_AMOUNT,
    UNSTAKE_GAS_LIMIT,
    logger,
)
from modules.utils import to_base_units


class Staking(Module):
    name = "Staking"

    @property
    def settings(self):
        return self.config.stake

    def get_token(self):
        token = self.config.find_token(self.settings.token)
        if not token:
            logger.error(f"{self.label} {self.settings.token} token config not found")
        return token

    def stake_once(self) -> bool:
        """Function: stakeDeposit(address staker, uint256 amount, address tokenVault)"""
        token = self.get_token()
        if not token:
            return False

        amount = to_base_units(STAKE_AMOUNT, token.decimals)
        data = encode_call(
            Selector.STAKE_DEPOSIT,
            self.wallet.address,
            amount,
            self.wallet.to_checksum(self.settings.token_vault),
        )

        outcome = self.wallet.transact(
            lambda: self.wallet.build_raw_tx(
                self.settings.contract, data, STAKE_GAS_LIMIT, gas_multiplier=1.5
            ),
            tx_label=f"{self.label} stake {STAKE_AMOUNT} {token.symbol}",
        )
        return outcome.success

    def unstake_once(self) -> bool:
        """Function: unstake(uint256 amount)"""
        token = self.get_token()
        if not token:
            return False

        amount = to_base_units(UNSTAKE_AMOUNT, token.decimals)
        data = encode_call(Selector.UNSTAKE, amount)

        outcome = self.wallet.transact(
            lambda: self.wallet.build_raw_tx(
                self.settings.contract, data, UNSTAKE_GAS_LIMIT, gas_multiplier=1.5
            ),
            tx_label=f"{self.label} unstake {UNSTAKE_AMOUNT} {token.symbol}",
        )

        error = (outcome.error or "").lower()
        if "reverted" in error or "balance" in error:
            logger.warning(f"{self.label} Likely no staked tokens to unstake")

        return outcome.success

    def stake(self) -> bool:
        return self.retry(self.stake_once, "stake")

    def unstake(self) -> bool:
        return self.retry(self.unstake_once, "unstake")
