#!/usr/bin/env python3
"""
环境检查脚本

功能：
1. 检查服务凭据是否缺失或仍为示例值
2. 检查链上节点连通性和当前网络
3. 配置了私钥时显示账户余额，配置了合约地址时显示已铸造数量

使用方法：
    cd backend
    python -m scripts.check_env
"""

import sys
import asyncio
from pathlib import Path

# 添加项目根目录到 Python 路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# 优先加载 .env.local（本地开发配置）
from ainft.utils.config_utils import get_config_path, load_env_file

env_local_path = get_config_path(".env.local")
if env_local_path.exists():
    print(f"加载本地开发配置: {env_local_path}")
    load_env_file(env_local_path)

from eth_account import Account
from web3 import AsyncWeb3

from ainft.core.config import settings, validate_required_settings
from ainft.core.chain import ChainError, get_contract, get_read_provider
from ainft.utils.string_utils import mask_sensitive_info


def mark(value: str) -> str:
    return f"✓ {mask_sensitive_info(value)}" if value else "✗ 缺失"


async def check_chain() -> bool:
    """检查节点、账户余额和合约"""
    try:
        web3 = get_read_provider()
    except ChainError as e:
        print(f"  ✗ {e.message}")
        return False

    try:
        chain_id = await web3.eth.chain_id
        block_number = await web3.eth.block_number
    except Exception as e:
        print(f"  ✗ 无法连接节点: {e}")
        return False

    matched = "✓" if chain_id == settings.chain_id else "✗ 与目标网络不一致"
    print(f"  - Chain ID: {chain_id} {matched}")
    print(f"  - 最新区块: {block_number}")

    if settings.PRIVATE_KEY:
        try:
            address = Account.from_key(settings.PRIVATE_KEY).address
        except Exception as e:
            print(f"  ✗ 私钥无效: {e}")
            return False
        balance = await web3.eth.get_balance(address)
        print(f"  - 账户: {address}")
        print(f"  - 余额: {AsyncWeb3.from_wei(balance, 'ether')} {settings.chain_currency_symbol}")

    if settings.CONTRACT_ADDRESS:
        try:
            total = await get_contract(web3).total_supply()
        except Exception as e:
            print(f"  ✗ 读取合约失败: {e}")
            return False
        print(f"  - 合约: {settings.CONTRACT_ADDRESS}")
        print(f"  - 已铸造: {total}")

    return chain_id == settings.chain_id


async def main() -> int:
    """主函数"""
    print("=" * 60)
    print("环境配置检查")
    print("=" * 60)

    print("\n环境变量:")
    for key in ["REPLICATE_API_TOKEN", "PINATA_API_KEY", "PINATA_SECRET_KEY",
                "ALCHEMY_API_KEY", "SEPOLIA_RPC_URL", "CONTRACT_ADDRESS", "PRIVATE_KEY"]:
        print(f"  {key}: {mark(getattr(settings, key, ''))}")

    problems = validate_required_settings(settings)
    print("\n凭据检查:")
    if problems:
        for problem in problems:
            print(f"  ✗ {problem}")
    else:
        print("  ✓ 配置完整")

    print(f"\n网络配置 ({settings.chain_name}):")
    chain_ok = await check_chain()

    print()
    print("=" * 60)
    ok = not problems and chain_ok
    print("检查通过" if ok else "检查未通过")
    print("=" * 60)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
