"""
注入式钱包
按EIP-1193约定提供 request(method, params) 接口和事件通知，
LocalKeyWallet 使用本地私钥签名，在浏览器之外扮演MetaMask的角色
"""

import inspect
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Union

from eth_account import Account
from web3 import AsyncWeb3

from ainft.core.config import settings
from ainft.core.log_utils import get_logger
from ainft.core.chain.exceptions import (
    UNAUTHORIZED,
    UNRECOGNIZED_CHAIN,
    UNSUPPORTED_METHOD,
    USER_REJECTED_REQUEST,
    WalletRpcError,
)

logger = get_logger(__name__)

ApprovalCallback = Callable[[str, Any], Union[bool, Awaitable[bool]]]
Listener = Callable[[Any], None]


@dataclass
class ChainParameters:
    """wallet_addEthereumChain 所需的网络参数"""
    chain_id: int
    chain_name: str
    rpc_urls: List[str]
    block_explorer_urls: List[str] = field(default_factory=list)
    currency_name: str = "ETH"
    currency_symbol: str = "ETH"
    currency_decimals: int = 18

    @property
    def chain_id_hex(self) -> str:
        return hex(self.chain_id)

    def to_rpc_params(self) -> Dict[str, Any]:
        """转换为钱包RPC参数格式"""
        return {
            "chainId": self.chain_id_hex,
            "chainName": self.chain_name,
            "nativeCurrency": {
                "name": self.currency_name,
                "symbol": self.currency_symbol,
                "decimals": self.currency_decimals,
            },
            "rpcUrls": list(self.rpc_urls),
            "blockExplorerUrls": list(self.block_explorer_urls),
        }

    @classmethod
    def from_rpc_params(cls, params: Dict[str, Any]) -> "ChainParameters":
        currency = params.get("nativeCurrency") or {}
        return cls(
            chain_id=int(params["chainId"], 16),
            chain_name=params.get("chainName", ""),
            rpc_urls=list(params.get("rpcUrls") or []),
            block_explorer_urls=list(params.get("blockExplorerUrls") or []),
            currency_name=currency.get("name", "ETH"),
            currency_symbol=currency.get("symbol", "ETH"),
            currency_decimals=currency.get("decimals", 18),
        )

    @classmethod
    def target_chain(cls) -> "ChainParameters":
        """根据配置构建目标网络（默认Sepolia）"""
        return cls(
            chain_id=settings.chain_id,
            chain_name=settings.chain_name,
            rpc_urls=[settings.sepolia_rpc_endpoint] if settings.sepolia_rpc_endpoint else [],
            block_explorer_urls=[settings.block_explorer_url],
            currency_name=settings.chain_currency_name,
            currency_symbol=settings.chain_currency_symbol,
            currency_decimals=settings.chain_currency_decimals,
        )


class InjectedWallet(ABC):
    """注入式钱包接口"""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    @abstractmethod
    async def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        发送钱包RPC请求

        Raises:
            WalletRpcError: 钱包拒绝或无法处理请求
        """

    def on(self, event: str, listener: Listener) -> None:
        """订阅 accountsChanged / chainChanged 事件"""
        self._listeners[event].append(listener)

    def remove_listener(self, event: str, listener: Listener) -> None:
        if listener in self._listeners.get(event, []):
            self._listeners[event].remove(listener)

    def emit(self, event: str, payload: Any) -> None:
        for listener in list(self._listeners.get(event, [])):
            listener(payload)


class LocalKeyWallet(InjectedWallet):
    """本地私钥钱包"""

    def __init__(
        self,
        private_key: str,
        chains: Optional[Iterable[ChainParameters]] = None,
        active_chain_id: int = 1,
        approve: Optional[ApprovalCallback] = None,
        web3_factory: Optional[Callable[[str], AsyncWeb3]] = None,
    ):
        super().__init__()
        self._account = Account.from_key(private_key)
        self._chains: Dict[int, ChainParameters] = {chain.chain_id: chain for chain in chains or []}
        self._active_chain_id = active_chain_id
        self._approve = approve
        self._web3_factory = web3_factory or (lambda url: AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url)))
        self._authorized = False

    @property
    def address(self) -> str:
        return self._account.address

    @property
    def active_chain_id(self) -> int:
        return self._active_chain_id

    def known_chain_ids(self) -> List[int]:
        return list(self._chains.keys())

    async def _is_approved(self, method: str, payload: Any) -> bool:
        if self._approve is None:
            return True
        decision = self._approve(method, payload)
        if inspect.isawaitable(decision):
            decision = await decision
        return bool(decision)

    async def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        params = params or []
        handler = {
            "eth_requestAccounts": self._request_accounts,
            "eth_accounts": self._accounts,
            "eth_chainId": self._chain_id,
            "wallet_switchEthereumChain": self._switch_chain,
            "wallet_addEthereumChain": self._add_chain,
            "eth_sendTransaction": self._send_transaction,
        }.get(method)

        if handler is None:
            raise WalletRpcError(UNSUPPORTED_METHOD, f"The wallet does not support method: {method}")
        return await handler(params)

    async def _request_accounts(self, params: List[Any]) -> List[str]:
        if not await self._is_approved("eth_requestAccounts", params):
            raise WalletRpcError(USER_REJECTED_REQUEST, "User rejected the request.")
        self._authorized = True
        return [self.address]

    async def _accounts(self, params: List[Any]) -> List[str]:
        return [self.address] if self._authorized else []

    async def _chain_id(self, params: List[Any]) -> str:
        return hex(self._active_chain_id)

    async def _switch_chain(self, params: List[Any]) -> None:
        chain_id = int(params[0]["chainId"], 16)
        if chain_id not in self._chains:
            raise WalletRpcError(
                UNRECOGNIZED_CHAIN,
                f"Unrecognized chain ID \"{hex(chain_id)}\". Try adding the chain using wallet_addEthereumChain first."
            )
        if chain_id != self._active_chain_id:
            self._active_chain_id = chain_id
            logger.info("钱包网络已切换", chain_id=chain_id)
            self.emit("chainChanged", hex(chain_id))

    async def _add_chain(self, params: List[Any]) -> None:
        chain = ChainParameters.from_rpc_params(params[0])
        if not chain.rpc_urls:
            raise WalletRpcError(-32602, "rpcUrls must contain at least one URL")
        if not await self._is_approved("wallet_addEthereumChain", params[0]):
            raise WalletRpcError(USER_REJECTED_REQUEST, "User rejected the request.")
        self._chains[chain.chain_id] = chain
        logger.info("钱包已添加网络", chain_id=chain.chain_id, chain_name=chain.chain_name)

    def web3_for_active_chain(self) -> AsyncWeb3:
        chain = self._chains.get(self._active_chain_id)
        if chain is None or not chain.rpc_urls:
            raise WalletRpcError(UNRECOGNIZED_CHAIN, f"No RPC URL for chain {hex(self._active_chain_id)}")
        return self._web3_factory(chain.rpc_urls[0])

    async def _send_transaction(self, params: List[Any]) -> str:
        if not self._authorized:
            raise WalletRpcError(UNAUTHORIZED, "The requested account has not been authorized by the user.")

        tx = dict(params[0])
        if not await self._is_approved("eth_sendTransaction", tx):
            raise WalletRpcError(USER_REJECTED_REQUEST, "User denied transaction signature.")

        web3 = self.web3_for_active_chain()
        # 签名前移除from字段
        tx.pop("from", None)
        tx.setdefault("chainId", self._active_chain_id)
        if "nonce" not in tx:
            tx["nonce"] = await web3.eth.get_transaction_count(self.address, "pending")

        signed = self._account.sign_transaction(tx)
        tx_hash = await web3.eth.send_raw_transaction(signed.raw_transaction)
        return AsyncWeb3.to_hex(tx_hash)

    def revoke(self) -> None:
        """撤销授权，相当于用户在钱包中断开站点"""
        self._authorized = False
        self.emit("accountsChanged", [])
