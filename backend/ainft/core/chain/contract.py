"""
NFT合约访问
每次调用都基于当前的签名者或只读provider构建新的合约句柄
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted
from web3.logs import DISCARD

from ainft.core.config import settings
from ainft.core.log_utils import get_logger
from ainft.core.chain.abi import NFT_CONTRACT_ABI
from ainft.core.chain.exceptions import ChainError, ContractConfigurationError, TransactionFailedError
from ainft.core.chain.signer import WalletSigner

logger = get_logger(__name__)


@dataclass
class MintReceipt:
    """铸造结果"""
    transaction_hash: str
    token_id: Optional[int] = None
    recipient: Optional[str] = None
    token_uri: Optional[str] = None
    block_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transactionHash": self.transaction_hash,
            "tokenId": self.token_id,
            "recipient": self.recipient,
            "tokenURI": self.token_uri,
            "blockNumber": self.block_number,
        }


class NFTContract:
    """NFT合约句柄"""

    def __init__(self, web3: AsyncWeb3, address: str, signer: Optional[WalletSigner] = None):
        self.web3 = web3
        self.address = AsyncWeb3.to_checksum_address(address)
        self.signer = signer
        self.contract = web3.eth.contract(address=self.address, abi=NFT_CONTRACT_ABI)

    def _require_signer(self) -> WalletSigner:
        if self.signer is None:
            raise ContractConfigurationError("A signer is required to send transactions")
        return self.signer

    async def estimate_mint_gas(self, recipient: str, token_uri: str) -> int:
        signer = self._require_signer()
        recipient = AsyncWeb3.to_checksum_address(recipient)
        return await self.contract.functions.mintNFT(recipient, token_uri).estimate_gas(
            {"from": signer.address}
        )

    async def current_gas_price(self) -> int:
        return await self.web3.eth.gas_price

    async def mint_nft(
        self,
        recipient: str,
        token_uri: str,
        gas: Optional[int] = None,
        gas_price: Optional[int] = None,
    ) -> str:
        """
        提交 mintNFT(recipient, tokenURI) 交易

        Args:
            recipient: 接收地址
            token_uri: 元数据地址
            gas: Gas上限，为空时由节点估算
            gas_price: Gas价格，为空时使用节点报价

        Returns:
            str: 交易哈希
        """
        signer = self._require_signer()
        recipient = AsyncWeb3.to_checksum_address(recipient)

        tx_params: Dict[str, Any] = {"from": signer.address}
        if gas is not None:
            tx_params["gas"] = gas
        if gas_price is not None:
            tx_params["gasPrice"] = gas_price

        tx = await self.contract.functions.mintNFT(recipient, token_uri).build_transaction(tx_params)
        return await signer.send_transaction(tx)

    async def wait_for_confirmations(
        self,
        tx_hash: str,
        confirmations: int = 1,
        timeout: float = 180,
        poll_interval: float = 2.0,
    ) -> Any:
        """
        等待交易上链并达到指定确认数

        Raises:
            TransactionFailedError: 交易执行失败
            TimeExhausted: 超时未上链或未达到确认数
        """
        deadline = time.monotonic() + timeout
        receipt = await self.web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout, poll_latency=poll_interval
        )
        if receipt["status"] != 1:
            raise TransactionFailedError(
                "Transaction reverted",
                details={"transaction_hash": tx_hash, "block_number": receipt["blockNumber"]},
            )

        target_block = receipt["blockNumber"] + max(confirmations, 1) - 1
        while await self.web3.eth.block_number < target_block:
            if time.monotonic() >= deadline:
                raise TimeExhausted(
                    f"Transaction {tx_hash} did not reach {confirmations} confirmations in {timeout} seconds"
                )
            await asyncio.sleep(poll_interval)
        return receipt

    def extract_mint_receipt(self, receipt: Any, tx_hash: str) -> MintReceipt:
        """从交易回执中解析tokenId，优先NFTMinted事件，其次Transfer事件"""
        result = MintReceipt(transaction_hash=tx_hash, block_number=receipt.get("blockNumber"))

        minted = self.contract.events.NFTMinted().process_receipt(receipt, errors=DISCARD)
        if minted:
            args = minted[0]["args"]
            result.token_id = int(args["tokenId"])
            result.recipient = args["recipient"]
            result.token_uri = args["tokenURI"]
            return result

        transfers = self.contract.events.Transfer().process_receipt(receipt, errors=DISCARD)
        if transfers:
            args = transfers[0]["args"]
            result.token_id = int(args["tokenId"])
            result.recipient = args["to"]
            return result

        logger.warning("交易回执中未找到铸造事件", transaction_hash=tx_hash)
        return result

    async def token_uri(self, token_id: int) -> str:
        return await self.contract.functions.tokenURI(token_id).call()

    async def owner_of(self, token_id: int) -> str:
        return await self.contract.functions.ownerOf(token_id).call()

    async def get_user_tokens(self, user: str) -> List[int]:
        user = AsyncWeb3.to_checksum_address(user)
        return list(await self.contract.functions.getUserTokens(user).call())

    async def get_user_token_uris(self, user: str) -> List[str]:
        user = AsyncWeb3.to_checksum_address(user)
        return list(await self.contract.functions.getUserTokenURIs(user).call())

    async def total_supply(self) -> int:
        return await self.contract.functions.totalSupply().call()


def get_read_provider(rpc_url: Optional[str] = None) -> AsyncWeb3:
    """基于配置的RPC地址构建只读provider"""
    url = rpc_url or settings.sepolia_rpc_endpoint
    if not url:
        raise ChainError("RPC endpoint not configured")
    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url))


def get_contract(
    signer_or_provider: Union[WalletSigner, AsyncWeb3],
    address: Optional[str] = None,
) -> NFTContract:
    """
    获取合约句柄

    Args:
        signer_or_provider: 签名者（可发送交易）或只读provider
        address: 合约地址，默认取配置

    Raises:
        ContractConfigurationError: 合约地址未配置或格式错误
    """
    contract_address = address if address is not None else settings.CONTRACT_ADDRESS
    if not contract_address:
        raise ContractConfigurationError("Contract address not configured")
    if not AsyncWeb3.is_address(contract_address):
        raise ContractConfigurationError(
            f"Contract address is invalid: {contract_address}",
            details={"address": contract_address}
        )

    if isinstance(signer_or_provider, WalletSigner):
        return NFTContract(signer_or_provider.web3, contract_address, signer=signer_or_provider)
    return NFTContract(signer_or_provider, contract_address)
