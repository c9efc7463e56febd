"""
Configuration loading and validation for the cross-DEX monitor.

Everything is validated up front so a bad config aborts the process
before any RPC connection is attempted.
"""

import os
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from web3 import Web3

from .exceptions import ConfigurationInvalid
from .normalizer import to_smallest_units
from .types import CostModel, Token, TradingPair

DEFAULT_RPC_URL_ENV = "POLYGON_RPC_URL"
MIN_VENUES = 2


class ArbConfig:
    """
    Parsed and validated monitor configuration.

    Attributes:
        rpc_url: HTTP(S) RPC endpoint
        check_interval_seconds: Whole seconds between ticks (>= 1)
        minimum_profit_threshold: Net profit must strictly exceed this
        amount_in: Base token amount quoted on every venue
        simulated_gas_cost: Flat cost subtracted from gross profit
        request_timeout_sec: Per-request RPC timeout
        max_retries: Rate-limit retries per quote (0 disables retrying)
        max_venues: How many of the configured dexes are polled
        base_token: Token sold into the router (path[0])
        quote_token: Token quoted back (path[1])
        dexes: Ordered list of {name, router_address}
    """

    def __init__(self, config_dict: Dict[str, Any]):
        """
        Parse and validate config from dictionary.

        Args:
            config_dict: Loaded YAML config

        Raises:
            ConfigurationInvalid: If required fields missing or invalid
        """
        self.rpc_url: str = self._resolve_rpc_url(config_dict)

        # Loop settings
        self.check_interval_seconds: int = self._get_int(
            config_dict, "check_interval_seconds", minimum=1
        )
        self.request_timeout_sec: int = self._get_int(
            config_dict, "request_timeout_sec", minimum=1, default=20
        )
        self.max_retries: int = self._get_int(
            config_dict, "max_retries", minimum=0, default=0
        )

        # Trading parameters
        self.minimum_profit_threshold: Decimal = self._get_decimal(
            config_dict, "minimum_profit_threshold"
        )
        self.amount_in: Decimal = self._get_decimal(config_dict, "amount_in")
        if self.amount_in <= 0:
            raise ConfigurationInvalid(
                f"Config field 'amount_in' must be positive, got {self.amount_in}"
            )

        # Legacy name from the original settings file
        gas_key = (
            "simulated_gas_cost_usdc"
            if "simulated_gas_cost" not in config_dict
            and "simulated_gas_cost_usdc" in config_dict
            else "simulated_gas_cost"
        )
        self.simulated_gas_cost: Decimal = self._get_decimal(config_dict, gas_key)
        if self.simulated_gas_cost < 0:
            raise ConfigurationInvalid(
                f"Config field '{gas_key}' must be non-negative, got {self.simulated_gas_cost}"
            )

        # Tokens
        tokens_raw = config_dict.get("tokens")
        if not isinstance(tokens_raw, dict):
            raise ConfigurationInvalid("Missing required config section: tokens")
        self.base_token: Token = self._parse_token(tokens_raw, "base")
        self.quote_token: Token = self._parse_token(tokens_raw, "quote")
        if self.base_token.address == self.quote_token.address:
            raise ConfigurationInvalid("Base and quote tokens must be different")
        if to_smallest_units(self.amount_in, self.base_token.decimals) == 0:
            raise ConfigurationInvalid(
                f"Config field 'amount_in' {self.amount_in} is below one unit of "
                f"{self.base_token.symbol}"
            )

        # DEXes
        self.dexes: List[Dict[str, str]] = self._parse_dexes(
            config_dict.get("dexes", [])
        )
        if len(self.dexes) < MIN_VENUES:
            raise ConfigurationInvalid(
                f"Configuration must include at least {MIN_VENUES} DEXes, "
                f"got {len(self.dexes)}"
            )

        self.max_venues: int = self._get_int(
            config_dict, "max_venues", minimum=MIN_VENUES, default=MIN_VENUES
        )

    @staticmethod
    def _resolve_rpc_url(d: Dict[str, Any]) -> str:
        """RPC URL from config, or from the environment variable it names."""
        rpc_url = d.get("rpc_url")
        if rpc_url is None:
            env_name = d.get("rpc_url_env", DEFAULT_RPC_URL_ENV)
            rpc_url = os.getenv(env_name)
            if not rpc_url:
                raise ConfigurationInvalid(
                    f"No rpc_url in config and environment variable {env_name} not set"
                )
        if not isinstance(rpc_url, str) or not rpc_url.startswith(
            ("http://", "https://")
        ):
            raise ConfigurationInvalid(f"Invalid RPC URL format: {rpc_url}")
        return rpc_url

    @staticmethod
    def _get_int(
        d: Dict, key: str, minimum: int, default: Optional[int] = None
    ) -> int:
        """Get integer config field, required unless a default is given."""
        if key not in d:
            if default is None:
                raise ConfigurationInvalid(f"Missing required config field: {key}")
            return default
        val = d[key]
        if isinstance(val, bool) or not isinstance(val, int):
            raise ConfigurationInvalid(
                f"Config field '{key}' must be int, got {type(val).__name__}"
            )
        if val < minimum:
            raise ConfigurationInvalid(
                f"Config field '{key}' must be >= {minimum}, got {val}"
            )
        return val

    @staticmethod
    def _get_decimal(d: Dict, key: str) -> Decimal:
        """Get required numeric config field as a finite Decimal."""
        if key not in d:
            raise ConfigurationInvalid(f"Missing required config field: {key}")
        val = d[key]
        if isinstance(val, bool) or not isinstance(val, (int, float, str)):
            raise ConfigurationInvalid(
                f"Config field '{key}' must be numeric, got {type(val).__name__}"
            )
        try:
            parsed = Decimal(str(val).strip())
        except InvalidOperation as e:
            raise ConfigurationInvalid(
                f"Config field '{key}' is not a number: {val!r}"
            ) from e
        if not parsed.is_finite():
            raise ConfigurationInvalid(f"Config field '{key}' must be finite: {val!r}")
        return parsed

    @staticmethod
    def _parse_address(value: Any, where: str) -> str:
        if not isinstance(value, str) or not Web3.is_address(value):
            raise ConfigurationInvalid(f"{where} has invalid address: {value!r}")
        return Web3.to_checksum_address(value)

    @classmethod
    def _parse_token(cls, tokens_raw: Dict[str, Any], role: str) -> Token:
        """Parse and validate one token entry (base or quote)."""
        info = tokens_raw.get(role)
        if not isinstance(info, dict):
            raise ConfigurationInvalid(f"Token '{role}' config must be a dict")
        for required in ("symbol", "address", "decimals"):
            if required not in info:
                raise ConfigurationInvalid(f"Token '{role}' missing '{required}'")

        decimals = info["decimals"]
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise ConfigurationInvalid(f"Token '{role}' decimals must be an int")
        if not 0 <= decimals <= 255:
            raise ConfigurationInvalid(
                f"Token '{role}' decimals must be in [0, 255], got {decimals}"
            )

        return Token(
            symbol=str(info["symbol"]),
            address=cls._parse_address(info["address"], f"Token '{role}'"),
            decimals=decimals,
        )

    @classmethod
    def _parse_dexes(cls, dexes_raw: Any) -> List[Dict[str, str]]:
        """Parse and validate DEXes config, preserving order."""
        if not isinstance(dexes_raw, list):
            raise ConfigurationInvalid("dexes must be a list")

        dexes = []
        for i, dex in enumerate(dexes_raw):
            if not isinstance(dex, dict):
                raise ConfigurationInvalid(f"DEX config {i} must be a dict")

            name = dex.get("name")
            if not name:
                raise ConfigurationInvalid(f"DEX config {i} missing 'name'")
            if "router_address" not in dex:
                raise ConfigurationInvalid(f"DEX '{name}' missing 'router_address'")

            dexes.append(
                {
                    "name": str(name),
                    "router_address": cls._parse_address(
                        dex["router_address"], f"DEX '{name}'"
                    ),
                }
            )
        return dexes

    @property
    def pair(self) -> TradingPair:
        return TradingPair(base=self.base_token, quote=self.quote_token)

    @property
    def cost_model(self) -> CostModel:
        return CostModel(
            minimum_profit_threshold=self.minimum_profit_threshold,
            simulated_cost=self.simulated_gas_cost,
        )

    @property
    def active_dexes(self) -> List[Dict[str, str]]:
        """The dexes actually polled, in configured order."""
        return self.dexes[: self.max_venues]


def load_config(config_path: str) -> ArbConfig:
    """
    Load and validate config from YAML file.

    Values from a local .env file are loaded into the environment first so
    rpc_url_env can point at them.

    Args:
        config_path: Path to config YAML file

    Returns:
        Validated ArbConfig instance

    Raises:
        ConfigurationInvalid: If config invalid or file not found
    """
    load_dotenv()

    if not os.path.exists(config_path):
        raise ConfigurationInvalid(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationInvalid(f"Failed to parse YAML: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigurationInvalid("Config file must contain a YAML dictionary")

    return ArbConfig(config_dict)
