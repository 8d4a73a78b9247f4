"""
钱包签名者
把交易交给注入式钱包签名并广播
"""

from typing import Any, Dict

from web3 import AsyncWeb3

from ainft.core.chain.wallet import InjectedWallet


class WalletSigner:
    """绑定到单个账户的签名者"""

    def __init__(self, wallet: InjectedWallet, web3: AsyncWeb3, address: str):
        self.wallet = wallet
        self.web3 = web3
        self.address = AsyncWeb3.to_checksum_address(address)

    async def get_address(self) -> str:
        return self.address

    async def send_transaction(self, tx: Dict[str, Any]) -> str:
        """通过钱包发送交易，返回交易哈希"""
        tx = dict(tx)
        tx.setdefault("from", self.address)
        return await self.wallet.request("eth_sendTransaction", [tx])

    def __repr__(self) -> str:
        return f"<WalletSigner(address={self.address})>"
