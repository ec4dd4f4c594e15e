from modules.config import logger
from modules.faucet import Faucet
from modules.liquidity import Liquidity
from modules.market import Market
from modules.registration import Registration
from modules.staking import Staking
from modules.utils import random_sleep
from modules.vault import Vault

CATEGORIES = ("register", "faucet", "deposit", "stake", "trade", "liquidity")


class WalletPipeline:
    """
    Runs every enabled category for one wallet, in a fixed order:

        register > faucet > deposit > stake/unstake > trade > liquidity

    Category results are only logged, a failure never stops the next category.
    """

    def __init__(self, wallet, config, client=None):
        self.wallet = wallet
        self.config = config
        self.label = wallet.label
        self.client = client

    def register(self):
        return Registration(self.wallet, self.config, self.client).register()

    def faucet(self):
        success = Faucet(self.wallet, self.config).claim_all()

        logger.info(f"{self.label} Waiting for faucet tokens to be credited")
        random_sleep(self.config.faucet.delay_min, self.config.faucet.delay_max)
        return success

    def deposit(self):
        vault = Vault(self.wallet, self.config)
        return self.iterate("Deposit", self.config.deposit, vault.deposit_all)

    def stake(self):
        staking = Staking(self.wallet, self.config)
        settings = self.config.stake

        def stake_and_unstake():
            staked = staking.stake()
            random_sleep(settings.delay_min, settings.delay_max)
            unstaked = staking.unstake()
            return staked and unstaked

        return self.iterate("Stake", settings, stake_and_unstake)

    def trade(self):
        market = Market(self.wallet, self.config)
        return self.iterate("Trade", self.config.trade, market.trade_all)

    def liquidity(self):
        liquidity = Liquidity(self.wallet, self.config)
        return self.iterate("Liquidity", self.config.liquidity, liquidity.add_all)

    def iterate(self, title, settings, action) -> bool:
        overall_success = True

        for i in range(settings.iterations):
            logger.info(f"{self.label} {title} iteration {i + 1}/{settings.iterations}")

            if not action():
                overall_success = False

            if i < settings.iterations - 1:
                random_sleep(settings.delay_min, settings.delay_max)

        return overall_success

    def is_enabled(self, category) -> bool:
        if category == "register":
            return True
        return getattr(self.config, category).enabled

    def run_category(self, category) -> bool:
        return getattr(self, category)()

    def run(self, categories=CATEGORIES) -> dict:
        results = {}

        try:
            enabled = [c for c in categories if self.is_enabled(c)]

            for index, category in enumerate(enabled):
                results[category] = self.run_category(category)

                if index < len(enabled) - 1 and category != "faucet":
                    random_sleep(
                        self.config.bot.default_delay_min,
                        self.config.bot.default_delay_max,
                    )

        except Exception as error:
            logger.error(f"{self.label} Wallet run aborted: {error}")
            results["error"] = False

        self.log_summary(results)
        return results

    def log_summary(self, results):
        if results and all(results.values()):
            logger.success(f"{self.label} All operations completed\n")
            return

        summary = ", ".join(
            f"{category}: {'ok' if ok else 'failed'}" for category, ok in results.items()
        )
        logger.warning(f"{self.label} Finished with failures ({summary})\n")
