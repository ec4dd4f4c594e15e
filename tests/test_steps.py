"""
Unit tests for the step categories, run against a wallet double
"""

from unittest.mock import MagicMock

import pytest
from web3 import Web3

from conftest import ADDRESS, make_config, make_wallet
from models.outcome import TxOutcome
from modules.calldata import Selector, encode_call
from modules.faucet import Faucet
from modules.liquidity import Liquidity, build_liquidity_args, min_amount
from modules.market import Market
from modules.registration import Registration
from modules.staking import Staking
from modules.vault import Vault, deposit_amount

FAILED = TxOutcome.failed("execution reverted")


def _sent_tx(wallet, call=-1):
    """Run the build step of a recorded transact() call and return build_raw_tx args."""
    build = wallet.transact.call_args_list[call][0][0]
    build()
    return wallet.build_raw_tx.call_args


def _sent_amount(wallet, call=-1) -> int:
    data = _sent_tx(wallet, call)[0][1]
    return int.from_bytes(data[4:36], "big")


# ========== Faucet ==========

class TestFaucet:
    def test_existing_balance_skips_claim(self, config):
        wallet = make_wallet(balance=1)
        outcome = Faucet(wallet, config).claim(config.faucet.tokens[0])

        assert outcome.success
        wallet.transact.assert_not_called()

    def test_zero_balance_claims_once(self, config):
        wallet = make_wallet(balance=0)
        outcome = Faucet(wallet, config).claim(config.faucet.tokens[0])

        assert outcome.success
        assert wallet.transact.call_count == 1

    def test_mint_amount_uses_token_decimals(self, config):
        wallet = make_wallet(balance=0)
        mint = wallet.get_contract.return_value.functions.mint

        Faucet(wallet, config).claim(config.faucet.tokens[0])  # 6000 USDC, 6 decimals
        wallet.transact.call_args[0][0]()

        mint.assert_called_with(6_000_000_000)

    def test_successful_claim_is_not_repeated(self, config):
        wallet = make_wallet(balance=0)
        assert Faucet(wallet, config).claim_all() is True
        assert wallet.transact.call_count == len(config.faucet.tokens)

    def test_failed_claim_retried_up_to_max(self, config):
        wallet = make_wallet(balance=0, outcome=FAILED)
        assert Faucet(wallet, config).claim_all() is False
        assert wallet.transact.call_count == 3 * len(config.faucet.tokens)


# ========== Deposit ==========

class TestDeposit:
    @pytest.mark.parametrize(
        "balance, percentage, expected",
        [(1000, 20, 200), (1_000_003, 20, 200_000), (7, 50, 3), (10**24, 100, 10**24)],
    )
    def test_deposit_amount_is_floored_percentage(self, balance, percentage, expected):
        assert deposit_amount(balance, percentage) == expected

    def test_approve_then_deposit(self, config):
        wallet = make_wallet(balance=1_000_000_000)
        assert Vault(wallet, config).deposit_all() is True

        assert wallet.approve.call_args[0][2] == 200_000_000
        to, data, gas = _sent_tx(wallet)[0]
        assert to == config.deposit.vaults[0].contract
        assert data == encode_call(Selector.VAULT_DEPOSIT, ADDRESS, 200_000_000)
        assert gas == 300_000

    def test_failed_approval_skips_deposit(self, config):
        wallet = make_wallet(balance=1_000_000_000)
        wallet.approve.return_value = FAILED

        assert Vault(wallet, config).deposit_all() is False
        assert wallet.approve.call_count == 3
        wallet.transact.assert_not_called()

    def test_failed_vault_does_not_stop_the_next(self):
        config = make_config(
            deposit={
                "vaults": [
                    {"symbol": "USDC", "contract": "0xF143934804C28e40CC3439283c12cEBcC6949131"},
                    {"symbol": "DXTR", "contract": "0xFB9D5E8e8Eb1780031BC6c29279dFb9D9d3B155E"},
                ]
            }
        )
        wallet = make_wallet(balance=100)
        wallet.approve.side_effect = [FAILED] * 3 + [TxOutcome(True, "0x1", 1)]

        assert Vault(wallet, config).deposit_all() is False
        assert wallet.transact.call_count == 1

    def test_zero_balance_skips_vault(self, config):
        wallet = make_wallet(balance=0)
        assert Vault(wallet, config).deposit_all() is True
        wallet.approve.assert_not_called()

    def test_unknown_token_fails_vault_locally(self):
        config = make_config(deposit={"vaults": [{"symbol": "XYZ", "contract": "0x0"}]})
        wallet = make_wallet(balance=100)

        assert Vault(wallet, config).deposit_all() is False
        wallet.get_token_balance.assert_not_called()

    def test_unknown_method_id_fails_vault_locally(self):
        config = make_config(
            deposit={"vaults": [{"symbol": "USDC", "contract": "0x0", "methodId": "0x12345678"}]}
        )
        wallet = make_wallet(balance=100)

        assert Vault(wallet, config).deposit_all() is False
        wallet.approve.assert_not_called()


# ========== Stake / Unstake ==========

class TestStaking:
    def test_stake_uses_fixed_amount(self, config):
        wallet = make_wallet()
        assert Staking(wallet, config).stake() is True

        to, data, gas = _sent_tx(wallet)[0]
        assert to == config.stake.contract
        assert gas == 300_000
        assert data == encode_call(
            Selector.STAKE_DEPOSIT,
            ADDRESS,
            300 * 10**18,
            Web3.to_checksum_address(config.stake.token_vault),
        )

    def test_stake_amount_ignores_balance(self, config):
        wallet = make_wallet(balance=10**30)
        Staking(wallet, config).stake()

        assert _sent_amount(wallet) != 0
        wallet.get_token_balance.assert_not_called()

    def test_unstake_uses_fixed_amount(self, config):
        wallet = make_wallet()
        assert Staking(wallet, config).unstake() is True

        to, data, gas = _sent_tx(wallet)[0]
        assert data == encode_call(Selector.UNSTAKE, 50 * 10**18)
        assert gas == 200_000

    def test_reverted_unstake_warns_and_fails(self, config, log_messages):
        wallet = make_wallet(outcome=FAILED)

        assert Staking(wallet, config).unstake() is False
        assert wallet.transact.call_count == 3
        assert any("no staked tokens" in message for message in log_messages)

    def test_unstake_reverted_on_chain_warns(self, config, log_messages):
        wallet = make_wallet(outcome=TxOutcome.from_receipt("0xabc", 0))

        assert Staking(wallet, config).unstake() is False
        assert any("no staked tokens" in message for message in log_messages)

    def test_other_unstake_error_does_not_warn(self, config, log_messages):
        wallet = make_wallet(outcome=TxOutcome.failed("connection refused"))

        assert Staking(wallet, config).unstake() is False
        assert not any("no staked tokens" in message for message in log_messages)

    def test_missing_stake_token_fails(self):
        config = make_config(stake={"token": "XYZ"})
        wallet = make_wallet()

        assert Staking(wallet, config).stake() is False
        wallet.transact.assert_not_called()


# ========== Trade ==========

class TestMarket:
    def test_buy_amount_within_range(self, config):
        wallet = make_wallet()
        market = Market(wallet, config)
        pair = config.trade.pairs[0]

        for call in range(200):
            market.buy(pair)
            amount = _sent_amount(wallet, call)
            assert 10**17 <= amount <= 2 * 10**17

    def test_sell_uses_sell_selector(self, config):
        wallet = make_wallet()
        Market(wallet, config).sell(config.trade.pairs[0])

        data = _sent_tx(wallet)[0][1]
        assert data[:4] == Selector.SELL_MARKET.prefix

    def test_failed_buy_still_sells(self, config):
        wallet = make_wallet()
        wallet.transact.side_effect = [FAILED] * 3 + [TxOutcome(True, "0x1", 1)]

        assert Market(wallet, config).trade_all() is False
        assert wallet.transact.call_count == 4

        sell_data = _sent_tx(wallet, call=3)[0][1]
        assert sell_data[:4] == Selector.SELL_MARKET.prefix

    def test_buy_and_sell_both_succeed(self, config):
        wallet = make_wallet()
        assert Market(wallet, config).trade_all() is True
        assert wallet.transact.call_count == 2

    def test_unknown_base_token_fails_pair(self):
        config = make_config()
        pair = config.trade.pairs[0]
        config = make_config(
            trade={
                "pairs": [
                    {
                        "name": pair.name,
                        "contract": pair.contract,
                        "baseToken": "XYZ",
                        "quoteToken": "USDC",
                        "minBuy": 1,
                        "maxBuy": 2,
                        "minSell": 1,
                        "maxSell": 2,
                    }
                ]
            }
        )
        wallet = make_wallet()

        assert Market(wallet, config).trade_all() is False
        wallet.transact.assert_not_called()


# ========== Liquidity ==========

class TestLiquidity:
    def test_min_amount_applies_slippage(self):
        assert min_amount(90_000_000, 5) == 85_500_000
        assert min_amount(7 * 10**17, 5) == 665 * 10**15
        assert min_amount(100, 0) == 100

    def test_liquidity_args(self, config):
        wallet = make_wallet()
        pair = config.liquidity.pairs[0]

        efl, permit_tokens, min_prices, max_prices = build_liquidity_args(wallet, pair)

        assert efl == (
            Web3.to_checksum_address(pair.token1.address),
            90_000_000,
            85_500_000,
            665 * 10**15,
        )
        assert permit_tokens == [Web3.to_checksum_address(pair.token2.address)]
        assert min_prices == [431_487 * 10**15]
        assert max_prices == [801_333 * 10**15]

    def test_add_liquidity_sends_enable_free_liquidity(self, config):
        wallet = make_wallet()
        assert Liquidity(wallet, config).add_all() is True

        args, kwargs = _sent_tx(wallet)
        to, data, gas = args
        assert to == config.liquidity.contract
        assert data[:4] == Selector.ENABLE_FREE_LIQUIDITY.prefix
        assert gas == 700_000
        assert kwargs["gas_multiplier"] == 1.3

    def test_failed_pair_is_retried(self, config):
        wallet = make_wallet(outcome=FAILED)
        assert Liquidity(wallet, config).add_all() is False
        assert wallet.transact.call_count == 3


# ========== Registration ==========

class TestRegistration:
    def _client(self, registered=False, response=None):
        client = MagicMock()
        client.is_registered.return_value = registered
        client.register.return_value = response or {"status": True}
        return client

    def test_registered_wallet_short_circuits(self, config):
        client = self._client(registered=True)

        assert Registration(make_wallet(), config, client).register() is True
        client.register.assert_not_called()

    def test_registers_new_wallet(self, config):
        client = self._client()

        assert Registration(make_wallet(), config, client).register() is True
        client.register.assert_called_once_with("")

    def test_rejected_registration_uses_bot_retries(self, config):
        client = self._client(response={"status": False, "msg": "invalid wallet"})

        assert Registration(make_wallet(), config, client).register() is False
        assert client.register.call_count == config.bot.max_retries
