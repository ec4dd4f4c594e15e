from modules.base import Module
from modules.config import logger
from modules.dextr_api_client import DextrApiClient
from modules.retry import RetryPolicy


class Registration(Module):
    name = "Dextr"

    def __init__(self, wallet, config, client=None):
        super().__init__(wallet, config)
        self.client = client or DextrApiClient(
            self.label, wallet.address, wallet.proxy
        )

    @property
    def policy(self) -> RetryPolicy:
        bot = self.config.bot
        return RetryPolicy(
            bot.max_retries, bot.default_delay_min, bot.default_delay_max
        )

    def register_once(self) -> bool:
        if self.client.is_registered():
            logger.info(f"{self.label} Wallet already registered")
            return True

        logger.info(f"{self.label} Registering wallet")
        data = self.client.register(self.config.bot.referral_by)

        if data.get("status"):
            logger.success(f"{self.label} Registration successful")
            return True

        logger.error(f"{self.label} Registration failed: {data.get('msg')}")
        return False

    def register(self) -> bool:
        return self.retry(self.register_once, "register")
