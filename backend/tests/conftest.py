"""
测试配置和fixtures
为所有测试提供共享的配置和fixtures

环境变量必须在导入ainft之前设置，数据库使用临时SQLite文件
"""

import os
import tempfile

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "ERROR")
os.environ.setdefault("ENABLE_MLFLOW", "false")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{os.path.join(tempfile.gettempdir(), 'ainft_test.db')}"
)

import pytest

from ainft.core.config import settings
from ainft.core.chain import ChainParameters
from tests.utils.test_data_utils import CONTRACT_ADDRESS


@pytest.fixture
def sepolia_chain() -> ChainParameters:
    """测试用Sepolia网络参数"""
    return ChainParameters(
        chain_id=11155111,
        chain_name="Sepolia",
        rpc_urls=["https://rpc.sepolia.test"],
        block_explorer_urls=["https://sepolia.etherscan.io"],
    )


@pytest.fixture
def contract_settings(monkeypatch):
    """配置合约地址和RPC地址"""
    monkeypatch.setattr(settings, "CONTRACT_ADDRESS", CONTRACT_ADDRESS)
    monkeypatch.setattr(settings, "SEPOLIA_RPC_URL", "https://rpc.sepolia.test")
    return settings


@pytest.fixture
def client():
    """带生命周期的测试客户端"""
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def state_file(tmp_path):
    """客户端状态文件路径"""
    return tmp_path / "nft_generation_state.json"


# 测试标记配置
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "integration: 集成测试")
    config.addinivalue_line("markers", "basic: 基础功能测试")
    config.addinivalue_line("markers", "config: 配置测试")
    config.addinivalue_line("markers", "logging: 日志测试")
    config.addinivalue_line("markers", "imports: 导入测试")
    config.addinivalue_line("markers", "imggen: 图片生成测试")
    config.addinivalue_line("markers", "storage: IPFS存储测试")
    config.addinivalue_line("markers", "wallet: 钱包测试")
    config.addinivalue_line("markers", "contract: 合约访问测试")
    config.addinivalue_line("markers", "minting: 铸造测试")
    config.addinivalue_line("markers", "client: 客户端测试")
    config.addinivalue_line("markers", "orchestrator: 铸造编排测试")
    config.addinivalue_line("markers", "generation: 生成接口测试")
    config.addinivalue_line("markers", "users: 用户接口测试")
    config.addinivalue_line("markers", "nft: NFT接口测试")
