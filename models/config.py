from dataclasses import dataclass, field
from typing import Optional, Tuple


class ConfigError(Exception):
    pass


def _section(tree: dict, name: str) -> dict:
    section = tree.get(name)
    if not isinstance(section, dict):
        raise ConfigError(f"Missing or invalid '{name}' section")
    return section


def _require(section: dict, key: str, where: str):
    if key not in section or section[key] is None:
        raise ConfigError(f"Missing '{where}.{key}'")
    return section[key]


def _pair(value, where: str) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"'{where}' must be a [min, max] pair")
    low, high = int(value[0]), int(value[1])
    if low > high:
        raise ConfigError(f"'{where}' min is greater than max")
    return low, high


@dataclass(frozen=True)
class BotSettings:
    name: str = "Dextr Bot"
    use_proxy: bool = False
    private_key_path: str = "pk.txt"
    proxy_path: str = "proxy.txt"
    default_delay_min: int = 5
    default_delay_max: int = 15
    running_delay: int = 90_000_000  # ms, 25 hours
    shuffle_wallets: bool = False
    max_retries: int = 1
    referral_by: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "BotSettings":
        return cls(
            name=data.get("name", cls.name),
            use_proxy=bool(data.get("useProxy", cls.use_proxy)),
            private_key_path=data.get("privateKeyPath", cls.private_key_path),
            proxy_path=data.get("proxyPath", cls.proxy_path),
            default_delay_min=int(data.get("defaultDelayMin", cls.default_delay_min)),
            default_delay_max=int(data.get("defaultDelayMax", cls.default_delay_max)),
            running_delay=int(data.get("runningDelay", cls.running_delay)),
            shuffle_wallets=bool(data.get("shuffleWallets", cls.shuffle_wallets)),
            max_retries=int(data.get("maxRetries", cls.max_retries)),
            referral_by=data.get("referralBy") or "",
        )


@dataclass(frozen=True)
class NetworkConfig:
    chain_id: int
    rpc: str
    block_explorer: str
    gas_limit: int = 500_000
    gas_price: Optional[float] = None  # gwei, None reads it from the chain

    @classmethod
    def from_dict(cls, data: dict) -> "NetworkConfig":
        gas_price = data.get("gasPrice")
        return cls(
            chain_id=int(_require(data, "chainId", "network")),
            rpc=_require(data, "rpc", "network"),
            block_explorer=data.get("blockExplorer", "").rstrip("/"),
            gas_limit=int(data.get("gasLimit") or cls.gas_limit),
            gas_price=float(gas_price) if gas_price is not None else None,
        )


@dataclass(frozen=True)
class TokenDescriptor:
    symbol: str
    contract: str
    decimals: int = 18
    amount: float = 0

    @classmethod
    def from_dict(cls, data: dict, where: str) -> "TokenDescriptor":
        return cls(
            symbol=_require(data, "symbol", where),
            contract=_require(data, "contract", where),
            decimals=int(data.get("decimals", 18)),
            amount=data.get("amount", 0),
        )


@dataclass(frozen=True)
class Category:
    """Fields shared by every operation section."""

    enabled: bool = False
    iterations: int = 1
    delay_min: int = 5
    delay_max: int = 15
    max_retries: int = 3
    retry_delay: Tuple[int, int] = (2, 5)

    @staticmethod
    def common(data: dict, name: str, retry_delay=(2, 5)) -> dict:
        delay_min = int(data.get("delayMin", 5))
        delay_max = int(data.get("delayMax", 15))
        if delay_min > delay_max:
            raise ConfigError(f"'{name}.delayMin' is greater than '{name}.delayMax'")

        return dict(
            enabled=bool(data.get("enabled", False)),
            iterations=int(data.get("iterations", 1)),
            delay_min=delay_min,
            delay_max=delay_max,
            max_retries=int(data.get("maxRetries", 3)),
            retry_delay=_pair(data.get("retryDelay", retry_delay), f"{name}.retryDelay"),
        )


@dataclass(frozen=True)
class FaucetConfig(Category):
    tokens: Tuple[TokenDescriptor, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "FaucetConfig":
        tokens = tuple(
            TokenDescriptor.from_dict(token, f"faucet.tokens[{i}]")
            for i, token in enumerate(data.get("tokens") or [])
        )
        return cls(tokens=tokens, **cls.common(data, "faucet", retry_delay=(5, 10)))


@dataclass(frozen=True)
class VaultConfig:
    symbol: str
    contract: str
    method_id: str = "0x609e7624"


@dataclass(frozen=True)
class DepositConfig(Category):
    percentage: int = 20
    vaults: Tuple[VaultConfig, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "DepositConfig":
        vaults = tuple(
            VaultConfig(
                symbol=_require(vault, "symbol", f"deposit.vaults[{i}]"),
                contract=_require(vault, "contract", f"deposit.vaults[{i}]"),
                method_id=vault.get("methodId", VaultConfig.method_id),
            )
            for i, vault in enumerate(data.get("vaults") or [])
        )
        return cls(
            percentage=int(data.get("percentage", cls.percentage)),
            vaults=vaults,
            **cls.common(data, "deposit"),
        )


@dataclass(frozen=True)
class StakeConfig(Category):
    contract: str = ""
    token_vault: str = ""
    token: str = "DXTR"
    stake_percentage: int = 30
    unstake_percentage: int = 10

    @classmethod
    def from_dict(cls, data: dict) -> "StakeConfig":
        common = cls.common(data, "stake")
        if common["enabled"]:
            _require(data, "contract", "stake")
            _require(data, "tokenVault", "stake")

        return cls(
            contract=data.get("contract", ""),
            token_vault=data.get("tokenVault", ""),
            token=data.get("token", cls.token),
            stake_percentage=int(data.get("stakePercentage", cls.stake_percentage)),
            unstake_percentage=int(
                data.get("unstakePercentage", cls.unstake_percentage)
            ),
            **common,
        )


@dataclass(frozen=True)
class TradePair:
    name: str
    contract: str
    base_token: str
    quote_token: str
    min_buy: float
    max_buy: float
    min_sell: float
    max_sell: float


@dataclass(frozen=True)
class TradeConfig(Category):
    pairs: Tuple[TradePair, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "TradeConfig":
        pairs = []
        for i, pair in enumerate(data.get("pairs") or []):
            where = f"trade.pairs[{i}]"
            pairs.append(
                TradePair(
                    name=_require(pair, "name", where),
                    contract=_require(pair, "contract", where),
                    base_token=_require(pair, "baseToken", where),
                    quote_token=_require(pair, "quoteToken", where),
                    min_buy=float(_require(pair, "minBuy", where)),
                    max_buy=float(_require(pair, "maxBuy", where)),
                    min_sell=float(_require(pair, "minSell", where)),
                    max_sell=float(_require(pair, "maxSell", where)),
                )
            )
        return cls(pairs=tuple(pairs), **cls.common(data, "trade"))


@dataclass(frozen=True)
class LiquidityToken:
    symbol: str
    address: str
    decimals: int = 18


@dataclass(frozen=True)
class LiquidityPair:
    token1: LiquidityToken
    token2: LiquidityToken
    amount1: float
    amount2: float
    slippage1: int
    slippage2: int
    min_price: float
    max_price: float

    @property
    def name(self):
        return f"{self.token1.symbol}-{self.token2.symbol}"


@dataclass(frozen=True)
class LiquidityConfig(Category):
    contract: str = ""
    percentage: int = 10
    pairs: Tuple[LiquidityPair, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "LiquidityConfig":
        pairs = []
        for i, pair in enumerate(data.get("pairs") or []):
            where = f"liquidity.pairs[{i}]"
            tokens = []
            for key in ("token1", "token2"):
                token = _require(pair, key, where)
                tokens.append(
                    LiquidityToken(
                        symbol=_require(token, "symbol", f"{where}.{key}"),
                        address=_require(token, "address", f"{where}.{key}"),
                        decimals=int(token.get("decimals", 18)),
                    )
                )
            pairs.append(
                LiquidityPair(
                    token1=tokens[0],
                    token2=tokens[1],
                    amount1=_require(pair, "amount1", where),
                    amount2=_require(pair, "amount2", where),
                    slippage1=int(pair.get("slippage1", 0)),
                    slippage2=int(pair.get("slippage2", 0)),
                    min_price=_require(pair, "minPrice", where),
                    max_price=_require(pair, "maxPrice", where),
                )
            )

        common = cls.common(data, "liquidity")
        if common["enabled"]:
            _require(data, "contract", "liquidity")

        return cls(
            contract=data.get("contract", ""),
            percentage=int(data.get("percentage", cls.percentage)),
            pairs=tuple(pairs),
            **common,
        )


@dataclass(frozen=True)
class Config:
    bot: BotSettings
    network: NetworkConfig
    faucet: FaucetConfig = field(default_factory=FaucetConfig)
    deposit: DepositConfig = field(default_factory=DepositConfig)
    stake: StakeConfig = field(default_factory=StakeConfig)
    trade: TradeConfig = field(default_factory=TradeConfig)
    liquidity: LiquidityConfig = field(default_factory=LiquidityConfig)

    @classmethod
    def from_dict(cls, tree: dict) -> "Config":
        if not isinstance(tree, dict):
            raise ConfigError("Configuration root must be a mapping")

        return cls(
            bot=BotSettings.from_dict(_section(tree, "bot")),
            network=NetworkConfig.from_dict(_section(tree, "network")),
            faucet=FaucetConfig.from_dict(tree.get("faucet") or {}),
            deposit=DepositConfig.from_dict(tree.get("deposit") or {}),
            stake=StakeConfig.from_dict(tree.get("stake") or {}),
            trade=TradeConfig.from_dict(tree.get("trade") or {}),
            liquidity=LiquidityConfig.from_dict(tree.get("liquidity") or {}),
        )

    def find_token(self, symbol: str) -> Optional[TokenDescriptor]:
        """Look up a token by symbol in the faucet token list."""
        for token in self.faucet.tokens:
            if token.symbol == symbol:
                return token
        return None
