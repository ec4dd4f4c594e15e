from modules.base import Module
from modules.calldata import Selector, encode_call
from modules.config import (
    APPROVE_GAS_LIMIT,
    APPROVE_PAUSE,
    DEPOSIT_GAS_LIMIT,
    logger,
)
from modules.utils import from_base_units, random_sleep


def deposit_amount(balance: int, percentage) -> int:
    return balance * int(percentage) // 100


class Vault(Module):
    name = "Vault"

    @property
    def settings(self):
        return self.config.deposit

    def approve(self, token, vault, amount):
        return self.wallet.approve(
            token.contract,
            vault.contract,
            amount,
            tx_label=f"{self.label} approve {from_base_units(amount, token.decimals):f} {token.symbol}",
            default_gas=APPROVE_GAS_LIMIT,
        )

    def deposit(self, token, vault, amount, selector=Selector.VAULT_DEPOSIT):
        """Function: deposit(address sender, uint256 amount)"""
        data = encode_call(selector, self.wallet.address, amount)

        return self.wallet.transact(
            lambda: self.wallet.build_raw_tx(
                vault.contract, data, DEPOSIT_GAS_LIMIT, gas_multiplier=1.5
            ),
            tx_label=f"{self.label} deposit {from_base_units(amount, token.decimals):f} {token.symbol}",
        )

    def deposit_vault(self, vault) -> bool:
        token = self.config.find_token(vault.symbol)

        if not token:
            logger.error(f"{self.label} No faucet token found for vault {vault.symbol}")
            return False

        try:
            selector = Selector.from_hex(vault.method_id)
        except ValueError as error:
            logger.error(f"{self.label} {vault.symbol} vault: {error}")
            return False

        balance = self.wallet.get_token_balance(token.contract, token.symbol)

        if balance == 0:
            logger.warning(f"{self.label} No {token.symbol} tokens to deposit")
            return True

        amount = deposit_amount(balance, self.settings.percentage)
        logger.info(
            f"{self.label} Depositing {from_base_units(amount, token.decimals):f} {token.symbol} ({self.settings.percentage}% of balance)"
        )

        approved = self.retry(
            lambda: self.approve(token, vault, amount), f"approve {token.symbol}"
        )
        if not approved:
            logger.error(f"{self.label} Skipping {token.symbol} deposit, approval failed")
            return False

        random_sleep(*APPROVE_PAUSE)

        return self.retry(
            lambda: self.deposit(token, vault, amount, selector),
            f"deposit {token.symbol}",
        )

    def deposit_all(self) -> bool:
        overall_success = True

        for index, vault in enumerate(self.settings.vaults):
            if not self.deposit_vault(vault):
                overall_success = False

            if index < len(self.settings.vaults) - 1:
                random_sleep(self.settings.delay_min, self.settings.delay_max)

        return overall_success
