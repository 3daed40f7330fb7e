"""Configuration management for the Hyperliquid proxy."""
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_PATH = PROJECT_ROOT / "config.yaml"

DEFAULT_RPC_URL = "https://api.hyperliquid.xyz/info"
DEFAULT_RATES_URL = "https://api.coinbase.com/v2/exchange-rates?currency=USD"


class Config:
    """Configuration singleton for the application."""

    _instance = None
    _config: dict = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if CONFIG_PATH.exists():
            with open(CONFIG_PATH, "r") as f:
                self._config = yaml.safe_load(f) or {}
        else:
            self._config = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    @property
    def rpc_url(self) -> str:
        return os.getenv("HYPERLIQUID_RPC_URL") or self.get("upstream.rpc_url", DEFAULT_RPC_URL)

    @property
    def exchange_rates_url(self) -> str:
        return os.getenv("EXCHANGE_RATES_URL") or self.get("upstream.exchange_rates_url", DEFAULT_RATES_URL)

    @property
    def upstream_timeout(self) -> float:
        return float(os.getenv("UPSTREAM_TIMEOUT") or self.get("upstream.timeout", 10.0))

    @property
    def details_max_chars(self) -> int:
        return int(self.get("upstream.details_max_chars", 100))

    @property
    def price_strategy(self) -> str:
        return os.getenv("PRICE_STRATEGY") or self.get("proxy.price_strategy", "snapshot")

    @property
    def position_source(self) -> str:
        return os.getenv("POSITION_SOURCE") or self.get("proxy.position_source", "mock")

    @property
    def failure_policy(self) -> str:
        return os.getenv("FAILURE_POLICY") or self.get("proxy.failure_policy", "surface")

    @property
    def tracked_wallets(self) -> list[str]:
        env_wallets = os.getenv("TRACKED_WALLETS", "")
        if env_wallets:
            return [w.strip() for w in env_wallets.split(",") if w.strip()]
        return self.get("proxy.tracked_wallets", [])

    @property
    def leaderboard_limit(self) -> int:
        return int(self.get("proxy.leaderboard_limit", 5))

    @property
    def tracked_symbols(self) -> list[str]:
        return self.get("proxy.tracked_symbols", ["USDC", "BTC", "ETH", "SOL"])

    @property
    def markets(self) -> list[dict]:
        return self.get("markets", [])

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL") or self.get("logging.level", "INFO")

    @property
    def log_to_file(self) -> bool:
        env_value = os.getenv("LOG_TO_FILE")
        if env_value is not None:
            return env_value.lower() in ("1", "true", "yes")
        return bool(self.get("logging.file", False))


config = Config()
