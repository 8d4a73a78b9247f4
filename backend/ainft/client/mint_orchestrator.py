"""
铸造编排器
串联 钱包会话 -> 生成客户端 -> 合约铸造，并维护界面所需的状态
"""

import asyncio
import enum
from dataclasses import dataclass
from typing import Callable, Optional

from ainft.core.config import settings
from ainft.core.log_utils import get_logger
from ainft.core.chain import (
    ChainError,
    MintError,
    MintErrorKind,
    MintReceipt,
    NFTContract,
    WalletSession,
    WalletSigner,
    describe_mint_error,
    get_contract,
    mint_token,
)
from ainft.client.generation_client import (
    GenerationClient,
    GenerationClientError,
    GenerationResult,
    InvalidPromptError,
)
from ainft.client.state_store import GenerationStateStore

logger = get_logger(__name__)

ContractFactory = Callable[[WalletSigner], NFTContract]

CONNECT_WALLET_MESSAGE = "Please connect your wallet first"
ENTER_PROMPT_MESSAGE = "Please enter a prompt"
GENERATE_FIRST_MESSAGE = "Please generate an image first"
SIGNER_MISSING_MESSAGE = "Wallet signer not available. Please reconnect your wallet."
BUSY_MESSAGE = "Another action is already in progress"


class OrchestratorState(str, enum.Enum):
    IDLE = "idle"
    GENERATING = "generating"
    GENERATED = "generated"
    MINTING = "minting"
    MINTED = "minted"
    ERROR = "error"


@dataclass
class MintOutcome:
    """一次铸造尝试的结果"""
    success: bool
    receipt: Optional[MintReceipt] = None
    error_kind: Optional[MintErrorKind] = None
    error: Optional[str] = None


class MintOrchestrator:
    """
    生成并铸造NFT的流程控制

    同一时间只允许一个操作执行，失败时回到可重试的状态并记录error。
    """

    def __init__(
        self,
        session: WalletSession,
        client: Optional[GenerationClient] = None,
        store: Optional[GenerationStateStore] = None,
        contract_factory: Optional[ContractFactory] = None,
        confirmations: Optional[int] = None,
        progress_interval: Optional[float] = None,
        progress_step: Optional[int] = None,
        progress_cap: Optional[int] = None,
    ):
        self.session = session
        self.client = client or GenerationClient()
        self.store = store or GenerationStateStore()
        self._contract_factory = contract_factory or get_contract
        self.confirmations = settings.mint_confirmations if confirmations is None else confirmations
        self._progress_interval = progress_interval or settings.client_progress_interval
        self._progress_step = progress_step or settings.client_progress_step
        self._progress_cap = progress_cap or settings.client_progress_cap

        self.state = OrchestratorState.IDLE
        self.prompt = ""
        self.result: Optional[GenerationResult] = None
        self.last_receipt: Optional[MintReceipt] = None
        self.progress = 0
        self.error: Optional[str] = None
        self._busy = False

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def metadata_url(self) -> Optional[str]:
        return self.result.metadata_url if self.result else None

    def set_prompt(self, prompt: str) -> None:
        self.prompt = prompt

    def restore(self) -> bool:
        """恢复重启前保存的生成结果"""
        saved = self.store.load()
        if saved is None:
            return False

        self.prompt, self.result = saved
        self.state = OrchestratorState.GENERATED
        logger.info("已恢复保存的生成结果", metadata_url=self.metadata_url)
        return True

    def _fail(self, message: str) -> None:
        self.error = message
        self.state = OrchestratorState.ERROR

    async def _advance_progress(self) -> None:
        # 展示用的进度，与后端真实进度无关
        while self.progress < self._progress_cap:
            await asyncio.sleep(self._progress_interval)
            self.progress = min(self.progress + self._progress_step, self._progress_cap)

    async def handle_generate(self) -> Optional[GenerationResult]:
        """
        生成图片

        Returns:
            成功时返回GenerationResult，前置条件不满足或失败时返回None
        """
        if self._busy:
            self.error = BUSY_MESSAGE
            return None
        if not self.session.is_connected:
            self._fail(CONNECT_WALLET_MESSAGE)
            return None
        if not self.prompt.strip():
            self._fail(ENTER_PROMPT_MESSAGE)
            return None

        self._busy = True
        self.state = OrchestratorState.GENERATING
        self.result = None
        self.last_receipt = None
        self.error = None
        self.progress = 0
        progress_task = asyncio.create_task(self._advance_progress())

        try:
            result = await self.client.generate_image(self.prompt)
        except (InvalidPromptError, GenerationClientError) as e:
            logger.error("图片生成失败", exception=e)
            self._fail(str(e))
            return None
        finally:
            progress_task.cancel()
            self._busy = False

        self.result = result
        self.progress = 100
        self.state = OrchestratorState.GENERATED
        try:
            self.store.save(self.prompt, result)
        except OSError as e:
            # 结果仍在内存中，只是重启后无法恢复
            logger.warning("保存生成状态失败", reason=str(e), path=str(self.store.path))
        logger.info("图片生成完成", metadata_url=self.metadata_url)
        return result

    async def handle_mint(self) -> MintOutcome:
        """铸造当前生成结果"""
        if self._busy:
            return MintOutcome(success=False, error=BUSY_MESSAGE)

        guidance = None
        if self.session.address is None:
            guidance = CONNECT_WALLET_MESSAGE
        elif self.session.signer is None:
            guidance = SIGNER_MISSING_MESSAGE
        elif not self.metadata_url:
            guidance = GENERATE_FIRST_MESSAGE
        if guidance is not None:
            self.error = guidance
            return MintOutcome(success=False, error=guidance)

        self._busy = True
        self.state = OrchestratorState.MINTING
        self.error = None
        try:
            contract = self._contract_factory(self.session.signer)
            receipt = await mint_token(
                contract,
                self.session.address,
                self.metadata_url,
                confirmations=self.confirmations
            )
        except MintError as e:
            self._fail(e.message)
            return MintOutcome(success=False, error_kind=e.kind, error=e.message)
        except ChainError as e:
            logger.error("获取合约失败", exception=e)
            self._fail(e.message)
            return MintOutcome(success=False, error_kind=MintErrorKind.UNKNOWN, error=e.message)
        except Exception as e:
            logger.error("铸造流程异常", exception=e)
            message = describe_mint_error(MintErrorKind.UNKNOWN, str(e))
            self._fail(message)
            return MintOutcome(success=False, error_kind=MintErrorKind.UNKNOWN, error=message)
        finally:
            self._busy = False

        self.last_receipt = receipt
        self.state = OrchestratorState.MINTED
        self.store.clear()
        self.prompt = ""
        logger.info("NFT已铸造到钱包", token_id=receipt.token_id, address=self.session.address)
        return MintOutcome(success=True, receipt=receipt)
