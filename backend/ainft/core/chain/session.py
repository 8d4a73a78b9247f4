"""
钱包会话
管理钱包连接生命周期，始终以配置的测试网络（默认Sepolia）为目标
"""

from typing import Any, Callable, List, Optional

from web3 import AsyncWeb3

from ainft.core.log_utils import get_logger
from ainft.core.log_messages import log_messages
from ainft.core.chain.exceptions import (
    UNRECOGNIZED_CHAIN,
    ChainError,
    WalletNotFoundError,
    WalletRpcError,
)
from ainft.core.chain.contract import get_read_provider
from ainft.core.chain.signer import WalletSigner
from ainft.core.chain.wallet import ChainParameters, InjectedWallet

logger = get_logger(__name__)

ProviderFactory = Callable[[InjectedWallet], AsyncWeb3]


def default_provider_factory(wallet: InjectedWallet) -> AsyncWeb3:
    """优先使用钱包当前网络的RPC，其次使用配置的RPC地址"""
    web3_for_active_chain = getattr(wallet, "web3_for_active_chain", None)
    if web3_for_active_chain is not None:
        return web3_for_active_chain()
    return get_read_provider()


class WalletSession:
    """
    钱包会话

    状态: address / provider / signer / error
    连接时可能触发切换网络或添加网络，完成后才视为已连接。
    """

    def __init__(
        self,
        wallet: Optional[InjectedWallet],
        target_chain: Optional[ChainParameters] = None,
        provider_factory: Optional[ProviderFactory] = None,
        on_reload: Optional[Callable[[], None]] = None,
    ):
        self.wallet = wallet
        self.target_chain = target_chain or ChainParameters.target_chain()
        self._provider_factory = provider_factory or default_provider_factory
        self._on_reload = on_reload

        self.address: Optional[str] = None
        self.provider: Optional[AsyncWeb3] = None
        self.signer: Optional[WalletSigner] = None
        self.error: Optional[str] = None

        self._connecting = False
        self._listening = False

    @property
    def is_connected(self) -> bool:
        return self.address is not None and self.signer is not None

    async def connect_wallet(self) -> bool:
        """
        连接钱包

        Returns:
            bool: 连接成功返回True，失败时设置error并返回False
        """
        logger.info(log_messages.WALLET_CONNECT_START)
        self._connecting = True
        try:
            if self.wallet is None:
                raise WalletNotFoundError()

            accounts = await self.wallet.request("eth_requestAccounts")
            logger.info("已获取钱包账户", account_count=len(accounts or []))
            if not accounts:
                raise ChainError("No accounts found")

            chain_id = int(await self.wallet.request("eth_chainId"), 16)
            logger.info("当前钱包网络", chain_id=chain_id)
            if chain_id != self.target_chain.chain_id:
                await self._switch_to_target_chain()

            provider = self._provider_factory(self.wallet)
            signer = WalletSigner(self.wallet, provider, accounts[0])

            self.address = signer.address
            self.provider = provider
            self.signer = signer
            self.error = None
            self._subscribe()

            logger.info(log_messages.WALLET_CONNECT_SUCCESS, address=self.address)
            return True

        except ChainError as e:
            logger.error(log_messages.WALLET_CONNECT_FAILED, exception=e)
            self.error = e.message
            return False
        except Exception as e:
            logger.error(log_messages.WALLET_CONNECT_FAILED, exception=e)
            self.error = str(e) or "Failed to connect wallet"
            return False
        finally:
            self._connecting = False

    async def _switch_to_target_chain(self) -> None:
        """切换到目标网络，钱包不认识该网络时先添加再重试切换"""
        chain_hex = self.target_chain.chain_id_hex
        logger.info(log_messages.WALLET_SWITCH_CHAIN, chain_id=chain_hex)
        try:
            await self.wallet.request("wallet_switchEthereumChain", [{"chainId": chain_hex}])
        except WalletRpcError as e:
            if e.rpc_code != UNRECOGNIZED_CHAIN:
                raise
            logger.info(log_messages.WALLET_ADD_CHAIN, chain_id=chain_hex)
            await self.wallet.request("wallet_addEthereumChain", [self.target_chain.to_rpc_params()])
            await self.wallet.request("wallet_switchEthereumChain", [{"chainId": chain_hex}])

    def disconnect_wallet(self) -> None:
        """断开钱包，清空全部会话状态（可重复调用）"""
        if self.address is not None:
            logger.info(log_messages.WALLET_DISCONNECTED, address=self.address)
        self.address = None
        self.provider = None
        self.signer = None
        self.error = None

    def _subscribe(self) -> None:
        if self._listening:
            return
        self.wallet.on("accountsChanged", self._handle_accounts_changed)
        self.wallet.on("chainChanged", self._handle_chain_changed)
        self._listening = True

    def _handle_accounts_changed(self, accounts: List[str]) -> None:
        if not accounts:
            self.disconnect_wallet()
            return
        if self.provider is not None:
            self.signer = WalletSigner(self.wallet, self.provider, accounts[0])
            self.address = self.signer.address
            logger.info("钱包账户已变更", address=self.address)

    def _handle_chain_changed(self, chain_id: Any) -> None:
        # 连接过程中自己发起的切换不触发重载
        if self._connecting:
            return
        logger.warning("钱包网络已变更，重置应用状态", chain_id=chain_id)
        self.disconnect_wallet()
        if self._on_reload is not None:
            self._on_reload()
