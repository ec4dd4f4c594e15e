from eth_account import Account
from web3 import Web3

from models.outcome import TxOutcome
from models.reading import Reading
from modules.config import (
    ERC20_ABI,
    FALLBACK_GAS_PRICE,
    GAS_ESTIMATE_BUFFER,
    TX_TIMEOUT,
    logger,
)
from modules.utils import mask_address


class Wallet:
    def __init__(self, private_key, network, counter="", proxy=None, web3=None):
        self.private_key = private_key
        self.account = Account.from_key(private_key)
        self.address = self.account.address

        self.network = network
        self.proxy = proxy
        self.web3 = web3 or self.create_web3(network.rpc, proxy)
        self.explorer = network.block_explorer

        self.counter = counter
        self.label = f"{counter} {mask_address(self.address)} |".strip()

    def __str__(self):
        return f"Wallet(address={self.address})"

    @staticmethod
    def create_web3(rpc, proxy=None):
        request_kwargs = {"timeout": 30}
        if proxy:
            request_kwargs["proxies"] = {"http": proxy, "https": proxy}

        return Web3(Web3.HTTPProvider(rpc, request_kwargs=request_kwargs))

    @property
    def tx_count(self):
        return self.web3.eth.get_transaction_count(self.address)

    def read_tx_count(self) -> Reading:
        try:
            return Reading.ok(self.tx_count)
        except Exception as error:
            return Reading.unavailable(error)

    def to_checksum(self, address):
        return Web3.to_checksum_address(address)

    def get_contract(self, address, abi=None):
        contract_address = self.to_checksum(address)
        if not abi:
            abi = ERC20_ABI

        return self.web3.eth.contract(address=contract_address, abi=abi)

    def read_balance(self, token_addr=None) -> Reading:
        """Native balance when no token is given, ERC-20 balance otherwise."""
        try:
            if token_addr is None:
                balance = self.web3.eth.get_balance(self.address)
            else:
                token = self.get_contract(token_addr)
                balance = token.functions.balanceOf(self.address).call()
        except Exception as error:
            return Reading.unavailable(error)

        return Reading.ok(balance)

    def get_token_balance(self, token_addr, symbol="token") -> int:
        reading = self.read_balance(token_addr)

        if not reading.available:
            logger.error(f"{self.label} Failed to get {symbol} balance: {reading.error}")

        return reading.unwrap_or(0)

    def read_gas_price(self) -> Reading:
        if self.network.gas_price is not None:
            return Reading.ok(Web3.to_wei(self.network.gas_price, "gwei"))

        try:
            return Reading.ok(self.web3.eth.gas_price)
        except Exception as error:
            return Reading.unavailable(error)

    def get_gas_price(self, multiplier=1.1) -> int:
        reading = self.read_gas_price()

        if not reading.available:
            logger.warning(f"{self.label} Failed to get gas price: {reading.error}")
            return FALLBACK_GAS_PRICE

        return reading.value * int(multiplier * 100) // 100

    def estimate_gas(self, tx, default=None) -> int:
        try:
            estimate = self.web3.eth.estimate_gas(tx)
            return estimate * GAS_ESTIMATE_BUFFER // 100

        except Exception as error:
            default = default or self.network.gas_limit
            logger.warning(
                f"{self.label} Gas estimation failed, using {default}: {error}"
            )
            return default

    def get_tx_data(self, value=0, **kwargs):
        return {
            "chainId": self.network.chain_id,
            "from": self.address,
            "nonce": self.web3.eth.get_transaction_count(self.address),
            "value": value,
            **kwargs,
        }

    def build_contract_tx(self, function, gas_multiplier=1.1, default_gas=None):
        """Typed contract call with a scaled gas price and an estimated gas limit."""
        tx = function.build_transaction(
            self.get_tx_data(gasPrice=self.get_gas_price(gas_multiplier), gas=0)
        )
        call = {key: tx[key] for key in ("from", "to", "data", "value")}
        tx["gas"] = self.estimate_gas(call, default_gas)

        return tx

    def build_raw_tx(self, to, data, gas_limit, gas_multiplier=1.1):
        """Raw call for contracts without an ABI, gas limit is fixed."""
        return self.get_tx_data(
            to=self.to_checksum(to),
            data=Web3.to_hex(data),
            gas=gas_limit,
            gasPrice=self.get_gas_price(gas_multiplier),
        )

    def send_tx(self, tx, tx_label="") -> TxOutcome:
        tx_hash = None
        logger.debug(
            f"{tx_label} | nonce={tx.get('nonce')} gas={tx.get('gas')} gasPrice={tx.get('gasPrice')}"
        )

        try:
            signed_tx = self.web3.eth.account.sign_transaction(tx, self.private_key)

            tx_hash = Web3.to_hex(
                self.web3.eth.send_raw_transaction(signed_tx.raw_transaction)
            )
            logger.info(f"{tx_label} | {self.explorer}/tx/{tx_hash}")

            tx_receipt = self.web3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=TX_TIMEOUT
            )

        except Exception as error:
            logger.error(f"{tx_label} | Tx failed: {error}")
            return TxOutcome.failed(error, tx_hash)

        outcome = TxOutcome.from_receipt(tx_hash, tx_receipt["status"])

        if outcome.success:
            logger.success(f"{tx_label} | Tx confirmed")
        else:
            logger.error(f"{tx_label} | Tx reverted, status {outcome.status}")

        return outcome

    def transact(self, build_tx, tx_label="") -> TxOutcome:
        """Build a transaction with `build_tx()` and send it."""
        try:
            tx = build_tx()
        except Exception as error:
            logger.error(f"{tx_label} | Failed to build tx: {error}")
            return TxOutcome.failed(error)

        return self.send_tx(tx, tx_label)

    def approve(self, token_address, spender, amount, tx_label, default_gas=None):
        token = self.get_contract(token_address)
        function = token.functions.approve(self.to_checksum(spender), amount)

        return self.transact(
            lambda: self.build_contract_tx(function, default_gas=default_gas),
            tx_label,
        )
