from modules.retry import RetryPolicy, retry


class Module:
    """A step category bound to one wallet and the shared read-only config."""

    name = ""

    def __init__(self, wallet, config):
        self.wallet = wallet
        self.config = config
        self.label = f"{wallet.label} {self.name} |"

    @property
    def settings(self):
        """This module's config section."""
        raise NotImplementedError

    @property
    def policy(self) -> RetryPolicy:
        return RetryPolicy.for_category(self.settings)

    def retry(self, action, label) -> bool:
        return retry(action, self.policy, label=f"{self.label} {label}")
