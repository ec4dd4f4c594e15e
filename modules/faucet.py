from models.outcome import TxOutcome
from modules.base import Module
from modules.config import logger
from modules.utils import from_base_units, random_sleep, to_base_units

MINT_ABI = [
    {
        "type": "function",
        "name": "mint",
        "inputs": [{"name": "amount", "type": "uint256"}],
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
    }
]


class Faucet(Module):
    name = "Faucet"

    @property
    def settings(self):
        return self.config.faucet

    def claim(self, token) -> TxOutcome:
        """Mint the configured amount unless the wallet already holds the token."""
        balance = self.wallet.get_token_balance(token.contract, token.symbol)

        if balance > 0:
            amount = from_base_units(balance, token.decimals)
            logger.info(f"{self.label} Already have {amount:f} {token.symbol}")
            return TxOutcome.skipped()

        amount = to_base_units(token.amount, token.decimals)
        contract = self.wallet.get_contract(token.contract, abi=MINT_ABI)

        return self.wallet.transact(
            lambda: self.wallet.build_contract_tx(contract.functions.mint(amount)),
            tx_label=f"{self.label} claim {token.amount} {token.symbol}",
        )

    def claim_all(self) -> bool:
        overall_success = True

        for token in self.settings.tokens:
            success = self.retry(lambda: self.claim(token), f"claim {token.symbol}")

            if success:
                random_sleep(self.settings.delay_min, self.settings.delay_max)
            else:
                overall_success = False

        return overall_success
