#!/usr/bin/env python3
"""
命令行铸造脚本

使用本地私钥充当钱包，按 连接钱包 -> 生成图片 -> 铸造 的顺序执行完整流程。
后端服务需要已启动（BACKEND_URL，默认 http://localhost:5000）。

使用方法：
    cd backend
    python -m scripts.mint_from_prompt "a robotic turtle"
    python -m scripts.mint_from_prompt --resume      # 铸造上次保存的生成结果
    python -m scripts.mint_from_prompt "..." --yes   # 不逐笔确认交易
"""

import sys
import argparse
import asyncio
from pathlib import Path

# 添加项目根目录到 Python 路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ainft.utils.config_utils import get_config_path, load_env_file

env_local_path = get_config_path(".env.local")
if env_local_path.exists():
    print(f"加载本地开发配置: {env_local_path}")
    load_env_file(env_local_path)

from ainft.core.config import settings
from ainft.core.chain import ChainParameters, LocalKeyWallet, WalletSession
from ainft.client import MintOrchestrator


def confirm(method: str, payload) -> bool:
    """交易发送前在终端确认"""
    if method != "eth_sendTransaction":
        return True
    print(f"  待签名交易: to={payload.get('to')} gas={payload.get('gas')}")
    return input("  确认发送? [y/N] ").strip().lower() == "y"


def parse_args():
    parser = argparse.ArgumentParser(description="生成AI图片并铸造为NFT")
    parser.add_argument("prompt", nargs="?", default="", help="图片提示词")
    parser.add_argument("--resume", action="store_true", help="铸造上次保存的生成结果")
    parser.add_argument("--yes", action="store_true", help="自动确认交易")
    return parser.parse_args()


async def main() -> int:
    """主函数"""
    args = parse_args()

    if not settings.PRIVATE_KEY:
        print("错误: 未配置 PRIVATE_KEY")
        return 1

    target = ChainParameters.target_chain()
    wallet = LocalKeyWallet(
        settings.PRIVATE_KEY,
        chains=[target],
        active_chain_id=target.chain_id,
        approve=None if args.yes else confirm
    )
    session = WalletSession(wallet, target_chain=target)
    orchestrator = MintOrchestrator(session)

    print(f"连接钱包 ({target.chain_name})...")
    if not await session.connect_wallet():
        print(f"错误: {session.error}")
        return 1
    print(f"  ✓ {session.address}")

    if args.resume:
        if not orchestrator.restore():
            print("错误: 没有保存的生成结果")
            return 1
        print(f"已恢复: {orchestrator.prompt}")
    else:
        orchestrator.set_prompt(args.prompt)
        print("生成图片...")
        result = await orchestrator.handle_generate()
        if result is None:
            print(f"错误: {orchestrator.error}")
            return 1
        print(f"  ✓ 图片: {result.display_image_url}")
        if result.metadata_url:
            print(f"  ✓ 元数据: {result.metadata_url}")

    print("铸造NFT...")
    outcome = await orchestrator.handle_mint()
    if not outcome.success:
        print(f"错误: {outcome.error}")
        return 1

    receipt = outcome.receipt
    print(f"  ✓ Token ID: {receipt.token_id}")
    print(f"  ✓ 交易: {settings.block_explorer_url}/tx/{receipt.transaction_hash}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
