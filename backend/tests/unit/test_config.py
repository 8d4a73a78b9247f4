"""
配置模块单元测试
"""

import pytest

from ainft.core.config import Settings, validate_required_settings


def make_settings(**overrides) -> Settings:
    values = {
        "REPLICATE_API_TOKEN": "r8_token",
        "PINATA_API_KEY": "pinata-key",
        "PINATA_SECRET_KEY": "pinata-secret",
        "pinning_enabled": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.mark.unit
@pytest.mark.config
class TestSettings:
    """Settings 单元测试类"""

    def test_complete_settings(self):
        assert validate_required_settings(make_settings()) == []

    def test_missing_token(self):
        problems = validate_required_settings(make_settings(REPLICATE_API_TOKEN=""))

        assert problems == ["REPLICATE_API_TOKEN is missing"]

    def test_placeholder_values(self):
        problems = validate_required_settings(make_settings(
            PINATA_API_KEY="your_pinata_api_key_here",
            PINATA_SECRET_KEY="your_pinata_secret_key_here",
        ))

        assert problems == [
            "PINATA_API_KEY is not updated with actual value",
            "PINATA_SECRET_KEY is not updated with actual value",
        ]

    def test_pinata_not_required_when_pinning_disabled(self):
        config = make_settings(pinning_enabled=False, PINATA_API_KEY="", PINATA_SECRET_KEY="")

        assert validate_required_settings(config) == []

    def test_secrets_are_stripped(self):
        assert make_settings(REPLICATE_API_TOKEN=' "r8_token" ').REPLICATE_API_TOKEN == "r8_token"

    @pytest.mark.parametrize("value, expected", [
        ("", None),
        ("0", None),
        (-1, None),
        ("120", 120.0),
        (600, 600.0),
    ])
    def test_poll_timeout(self, value, expected):
        assert make_settings(replicate_poll_timeout=value).replicate_poll_timeout == expected

    def test_rpc_endpoint_prefers_explicit_url(self):
        config = make_settings(SEPOLIA_RPC_URL="https://rpc.sepolia.test", ALCHEMY_API_KEY="abc")

        assert config.sepolia_rpc_endpoint == "https://rpc.sepolia.test"

    def test_rpc_endpoint_from_alchemy_key(self):
        config = make_settings(SEPOLIA_RPC_URL="", ALCHEMY_API_KEY="abc")

        assert config.sepolia_rpc_endpoint == "https://eth-sepolia.g.alchemy.com/v2/abc"

    def test_chain_defaults(self):
        config = make_settings()

        assert config.chain_id == 11155111
        assert config.chain_id_hex == "0xaa36a7"
        assert config.mint_confirmations == 2

    def test_cors_origins_from_json(self):
        config = make_settings(cors_origins='["http://localhost:5173"]')

        assert config.cors_origins == ["http://localhost:5173"]

    def test_server_minting_enabled(self):
        config = make_settings(
            PRIVATE_KEY="0xabc", CONTRACT_ADDRESS="0x5FbDB2315678afecb367f032d93F642f64180aa3",
            SEPOLIA_RPC_URL="https://rpc.sepolia.test"
        )

        assert config.server_minting_enabled is True
        assert make_settings(PRIVATE_KEY="").server_minting_enabled is False
