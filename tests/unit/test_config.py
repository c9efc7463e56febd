"""
Unit tests for polygon_arb/config.py

Every malformed config must fail with ConfigurationInvalid before any
network activity.
"""

import copy
import os
import tempfile
import unittest
from decimal import Decimal
from unittest.mock import patch

import yaml

from polygon_arb.config import ArbConfig, load_config
from polygon_arb.exceptions import ConfigurationInvalid

BASE_CONFIG = {
    "rpc_url": "https://polygon-rpc.com",
    "check_interval_seconds": 10,
    "minimum_profit_threshold": 1.0,
    "amount_in": 1.0,
    "simulated_gas_cost": 2.0,
    "tokens": {
        "base": {"symbol": "WETH", "address": "0x" + "11" * 20, "decimals": 18},
        "quote": {"symbol": "USDC", "address": "0x" + "22" * 20, "decimals": 6},
    },
    "dexes": [
        {"name": "QuickSwap", "router_address": "0x" + "33" * 20},
        {"name": "SushiSwap", "router_address": "0x" + "44" * 20},
    ],
}


def make_config(**overrides):
    config_dict = copy.deepcopy(BASE_CONFIG)
    for key, value in overrides.items():
        if value is None:
            config_dict.pop(key, None)
        else:
            config_dict[key] = value
    return config_dict


class TestValidConfig(unittest.TestCase):
    def test_parses_fields(self):
        config = ArbConfig(make_config())

        self.assertEqual(config.rpc_url, "https://polygon-rpc.com")
        self.assertEqual(config.check_interval_seconds, 10)
        self.assertEqual(config.minimum_profit_threshold, Decimal("1.0"))
        self.assertEqual(config.amount_in, Decimal("1.0"))
        self.assertEqual(config.simulated_gas_cost, Decimal("2.0"))
        self.assertEqual(config.base_token.decimals, 18)
        self.assertEqual(config.quote_token.symbol, "USDC")
        self.assertEqual([d["name"] for d in config.dexes], ["QuickSwap", "SushiSwap"])

    def test_defaults(self):
        config = ArbConfig(make_config())
        self.assertEqual(config.request_timeout_sec, 20)
        self.assertEqual(config.max_retries, 0)
        self.assertEqual(config.max_venues, 2)

    def test_float_parsed_through_str(self):
        """0.1 must become Decimal('0.1'), not the binary float expansion."""
        config = ArbConfig(make_config(simulated_gas_cost=0.1))
        self.assertEqual(config.simulated_gas_cost, Decimal("0.1"))

    def test_string_numbers_accepted(self):
        config = ArbConfig(make_config(amount_in="2.5"))
        self.assertEqual(config.amount_in, Decimal("2.5"))

    def test_legacy_gas_cost_key(self):
        config_dict = make_config(simulated_gas_cost=None, simulated_gas_cost_usdc=3)
        config = ArbConfig(config_dict)
        self.assertEqual(config.simulated_gas_cost, Decimal("3"))

    def test_pair_and_cost_model(self):
        config = ArbConfig(make_config())
        self.assertEqual(config.pair.name, "WETH/USDC")
        self.assertEqual(config.pair.path, [config.base_token.address, config.quote_token.address])
        self.assertEqual(config.cost_model.simulated_cost, Decimal("2.0"))
        self.assertEqual(config.cost_model.minimum_profit_threshold, Decimal("1.0"))

    def test_only_first_two_dexes_active(self):
        dexes = BASE_CONFIG["dexes"] + [
            {"name": "ApeSwap", "router_address": "0x" + "55" * 20}
        ]
        config = ArbConfig(make_config(dexes=dexes))
        self.assertEqual(len(config.dexes), 3)
        self.assertEqual([d["name"] for d in config.active_dexes], ["QuickSwap", "SushiSwap"])

    def test_max_venues_extends_active(self):
        dexes = BASE_CONFIG["dexes"] + [
            {"name": "ApeSwap", "router_address": "0x" + "55" * 20}
        ]
        config = ArbConfig(make_config(dexes=dexes, max_venues=3))
        self.assertEqual(len(config.active_dexes), 3)

    def test_rpc_url_from_environment(self):
        config_dict = make_config(rpc_url=None, rpc_url_env="TEST_ARB_RPC")
        with patch.dict(os.environ, {"TEST_ARB_RPC": "https://example.org/rpc"}):
            config = ArbConfig(config_dict)
        self.assertEqual(config.rpc_url, "https://example.org/rpc")


class TestInvalidConfig(unittest.TestCase):
    def assertInvalid(self, config_dict):
        with self.assertRaises(ConfigurationInvalid):
            ArbConfig(config_dict)

    def test_fewer_than_two_dexes(self):
        self.assertInvalid(make_config(dexes=BASE_CONFIG["dexes"][:1]))

    def test_no_dexes(self):
        self.assertInvalid(make_config(dexes=[]))

    def test_missing_required_numbers(self):
        for key in (
            "check_interval_seconds",
            "minimum_profit_threshold",
            "amount_in",
            "simulated_gas_cost",
        ):
            with self.subTest(key=key):
                self.assertInvalid(make_config(**{key: None}))

    def test_malformed_numbers(self):
        for key, value in (
            ("minimum_profit_threshold", "lots"),
            ("amount_in", [1]),
            ("simulated_gas_cost", True),
            ("amount_in", "NaN"),
        ):
            with self.subTest(key=key, value=value):
                self.assertInvalid(make_config(**{key: value}))

    def test_interval_must_be_whole_seconds(self):
        self.assertInvalid(make_config(check_interval_seconds=0))
        self.assertInvalid(make_config(check_interval_seconds=2.5))

    def test_amount_in_must_be_positive(self):
        self.assertInvalid(make_config(amount_in=0))

    def test_amount_in_below_one_base_unit(self):
        self.assertInvalid(make_config(amount_in="0.0000000000000000001"))

    def test_large_base_decimals_accepted(self):
        tokens = copy.deepcopy(BASE_CONFIG["tokens"])
        tokens["base"]["decimals"] = 60
        config = ArbConfig(make_config(tokens=tokens))
        self.assertEqual(config.base_token.decimals, 60)

    def test_negative_gas_cost(self):
        self.assertInvalid(make_config(simulated_gas_cost=-1))

    def test_token_missing_decimals(self):
        tokens = copy.deepcopy(BASE_CONFIG["tokens"])
        del tokens["quote"]["decimals"]
        self.assertInvalid(make_config(tokens=tokens))

    def test_token_decimals_out_of_range(self):
        tokens = copy.deepcopy(BASE_CONFIG["tokens"])
        tokens["base"]["decimals"] = 256
        self.assertInvalid(make_config(tokens=tokens))

    def test_same_base_and_quote(self):
        tokens = copy.deepcopy(BASE_CONFIG["tokens"])
        tokens["quote"]["address"] = tokens["base"]["address"]
        self.assertInvalid(make_config(tokens=tokens))

    def test_bad_router_address(self):
        dexes = copy.deepcopy(BASE_CONFIG["dexes"])
        dexes[1]["router_address"] = "0x1234"
        self.assertInvalid(make_config(dexes=dexes))

    def test_dex_missing_name(self):
        dexes = copy.deepcopy(BASE_CONFIG["dexes"])
        del dexes[0]["name"]
        self.assertInvalid(make_config(dexes=dexes))

    def test_missing_rpc_url(self):
        config_dict = make_config(rpc_url=None, rpc_url_env="TEST_ARB_RPC_UNSET")
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("TEST_ARB_RPC_UNSET", None)
            self.assertInvalid(config_dict)

    def test_rpc_url_scheme(self):
        self.assertInvalid(make_config(rpc_url="ws://localhost:8546"))


class TestLoadConfig(unittest.TestCase):
    def test_load_yaml_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "polygon.yaml")
            with open(path, "w") as f:
                yaml.safe_dump(BASE_CONFIG, f)

            config = load_config(path)

        self.assertEqual(config.check_interval_seconds, 10)
        self.assertEqual(len(config.dexes), 2)

    def test_missing_file(self):
        with self.assertRaises(ConfigurationInvalid):
            load_config("/nonexistent/polygon.yaml")

    def test_invalid_yaml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "bad.yaml")
            with open(path, "w") as f:
                f.write("dexes: [unclosed\n")
            with self.assertRaises(ConfigurationInvalid):
                load_config(path)

    def test_non_mapping_yaml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "list.yaml")
            with open(path, "w") as f:
                f.write("- 1\n- 2\n")
            with self.assertRaises(ConfigurationInvalid):
                load_config(path)

    def test_example_config_is_valid(self):
        example = os.path.join(
            os.path.dirname(__file__), "..", "..", "configs", "polygon.yaml"
        )
        with patch.dict(os.environ, {"POLYGON_RPC_URL": "https://polygon-rpc.com"}):
            config = load_config(example)
        self.assertEqual(config.pair.name, "WETH/USDC")
        self.assertEqual([d["name"] for d in config.active_dexes], ["QuickSwap", "SushiSwap"])


if __name__ == "__main__":
    unittest.main()
