"""
铸造编排器单元测试
钱包、后端和合约全部使用测试替身
"""

import httpx
import pytest
from unittest.mock import MagicMock

from ainft.client import (
    GenerationClient,
    GenerationResult,
    GenerationStateStore,
    MintOrchestrator,
    OrchestratorState,
)
from ainft.client.mint_orchestrator import (
    CONNECT_WALLET_MESSAGE,
    ENTER_PROMPT_MESSAGE,
    GENERATE_FIRST_MESSAGE,
    SIGNER_MISSING_MESSAGE,
)
from ainft.core.chain import (
    USER_REJECTED_REQUEST,
    ChainParameters,
    ContractConfigurationError,
    MintErrorKind,
    WalletRpcError,
    WalletSession,
    get_contract,
)
from ainft.core.config import settings
from tests.utils.mock_utils import MockBuilder, ScriptedWallet
from tests.utils.test_data_utils import IMAGE_URL, METADATA_URL, TEST_ADDRESS, TX_HASH, TestDataGenerator

SEPOLIA = 11155111


class Harness:
    """组装一套可控的编排器依赖"""

    def __init__(self, sepolia_chain: ChainParameters, state_file, response=None, status_code=200):
        self.wallet = ScriptedWallet(chain_id=1, known_chains=[1])
        self.provider_factory = MagicMock(return_value=MagicMock(name="web3"))
        self.session = WalletSession(self.wallet, target_chain=sepolia_chain,
                                     provider_factory=self.provider_factory)
        self.requests = []
        self.contract = MockBuilder.create_mock_contract(token_id=7)
        self.contract_factory = MagicMock(return_value=self.contract)
        self.store = GenerationStateStore(state_file)

        body = TestDataGenerator.generate_response() if response is None else response

        def backend(request):
            self.requests.append(request)
            return httpx.Response(status_code, json=body)

        self.orchestrator = MintOrchestrator(
            self.session,
            client=GenerationClient(base_url="http://backend.test", transport=httpx.MockTransport(backend)),
            store=self.store,
            contract_factory=self.contract_factory,
            progress_interval=0.001,
        )


@pytest.fixture
def harness(sepolia_chain, state_file):
    return Harness(sepolia_chain, state_file)


@pytest.mark.unit
@pytest.mark.orchestrator
class TestMintOrchestrator:
    """MintOrchestrator 单元测试类"""

    @pytest.mark.asyncio
    async def test_generate_and_mint_end_to_end(self, harness):
        """连接钱包 -> 生成 -> 铸造，全流程完成后状态被清空"""
        orchestrator = harness.orchestrator

        assert await harness.session.connect_wallet() is True
        assert harness.wallet.methods() == [
            "eth_requestAccounts",
            "eth_chainId",
            "wallet_switchEthereumChain",
            "wallet_addEthereumChain",
            "wallet_switchEthereumChain",
        ]

        orchestrator.set_prompt("a robotic turtle")
        result = await orchestrator.handle_generate()

        assert result.metadata_url == METADATA_URL
        assert orchestrator.state == OrchestratorState.GENERATED
        assert orchestrator.progress == 100
        assert len(harness.requests) == 1
        assert harness.store.load()[0] == "a robotic turtle"

        outcome = await orchestrator.handle_mint()

        assert outcome.success is True
        assert outcome.receipt.token_id == 7
        assert outcome.receipt.transaction_hash == TX_HASH
        harness.contract_factory.assert_called_once_with(harness.session.signer)
        harness.contract.mint_nft.assert_awaited_once()
        assert harness.contract.mint_nft.await_args.args == (TEST_ADDRESS, METADATA_URL)
        assert harness.contract.wait_for_confirmations.await_args.kwargs["confirmations"] == 2
        assert orchestrator.state == OrchestratorState.MINTED
        assert orchestrator.prompt == ""
        assert orchestrator.last_receipt.token_id == 7
        assert harness.store.load() is None

    @pytest.mark.asyncio
    async def test_generate_requires_wallet(self, harness):
        harness.orchestrator.set_prompt("a robotic turtle")

        assert await harness.orchestrator.handle_generate() is None

        assert harness.orchestrator.error == CONNECT_WALLET_MESSAGE
        assert harness.requests == []

    @pytest.mark.asyncio
    async def test_generate_requires_prompt(self, harness):
        await harness.session.connect_wallet()
        harness.orchestrator.set_prompt("   ")

        assert await harness.orchestrator.handle_generate() is None

        assert harness.orchestrator.error == ENTER_PROMPT_MESSAGE
        assert harness.requests == []

    @pytest.mark.asyncio
    async def test_generate_backend_error(self, sepolia_chain, state_file):
        harness = Harness(sepolia_chain, state_file, response={"error": "Prompt is required"}, status_code=400)
        await harness.session.connect_wallet()
        harness.orchestrator.set_prompt("a robotic turtle")

        assert await harness.orchestrator.handle_generate() is None

        assert harness.orchestrator.state == OrchestratorState.ERROR
        assert harness.orchestrator.error == "Prompt is required"
        assert harness.orchestrator.is_busy is False
        assert harness.store.load() is None

    @pytest.mark.asyncio
    async def test_mint_without_metadata_url(self, sepolia_chain, state_file):
        """未固定到IPFS的结果不能铸造"""
        harness = Harness(sepolia_chain, state_file, response={"imageUrl": IMAGE_URL})
        await harness.session.connect_wallet()
        harness.orchestrator.set_prompt("a robotic turtle")
        await harness.orchestrator.handle_generate()

        outcome = await harness.orchestrator.handle_mint()

        assert outcome.success is False
        assert outcome.error == GENERATE_FIRST_MESSAGE
        harness.contract_factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_mint_without_wallet(self, harness):
        harness.orchestrator.result = GenerationResult(**TestDataGenerator.generate_response())

        outcome = await harness.orchestrator.handle_mint()

        assert outcome.error == CONNECT_WALLET_MESSAGE
        harness.contract_factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_mint_without_signer(self, harness):
        await harness.session.connect_wallet()
        harness.session.signer = None
        harness.session.address = TEST_ADDRESS
        harness.orchestrator.result = GenerationResult(**TestDataGenerator.generate_response())

        outcome = await harness.orchestrator.handle_mint()

        assert outcome.error == SIGNER_MISSING_MESSAGE
        harness.contract_factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_mint_user_rejected_keeps_result(self, harness):
        """用户拒绝签名后保留生成结果，可以重试"""
        await harness.session.connect_wallet()
        harness.orchestrator.set_prompt("a robotic turtle")
        await harness.orchestrator.handle_generate()
        harness.contract.mint_nft.side_effect = WalletRpcError(USER_REJECTED_REQUEST, "User denied")

        outcome = await harness.orchestrator.handle_mint()

        assert outcome.success is False
        assert outcome.error_kind == MintErrorKind.USER_REJECTED
        assert harness.orchestrator.error == "Transaction was rejected in your wallet."
        assert harness.orchestrator.metadata_url == METADATA_URL
        assert harness.store.load() is not None

        harness.contract.mint_nft.side_effect = None
        retry = await harness.orchestrator.handle_mint()

        assert retry.success is True

    @pytest.mark.asyncio
    async def test_mint_contract_not_configured(self, harness):
        await harness.session.connect_wallet()
        harness.orchestrator.result = GenerationResult(**TestDataGenerator.generate_response())
        harness.contract_factory.side_effect = ContractConfigurationError("Contract address not configured")

        outcome = await harness.orchestrator.handle_mint()

        assert outcome.error_kind == MintErrorKind.UNKNOWN
        assert outcome.error == "Contract address not configured"

    @pytest.mark.asyncio
    async def test_mint_malformed_contract_address(self, harness, monkeypatch):
        """合约地址格式错误时回到可重试的错误状态"""
        monkeypatch.setattr(settings, "CONTRACT_ADDRESS", "0x1234")
        await harness.session.connect_wallet()
        harness.orchestrator.result = GenerationResult(**TestDataGenerator.generate_response())
        harness.contract_factory.side_effect = get_contract

        outcome = await harness.orchestrator.handle_mint()

        assert outcome.success is False
        assert outcome.error_kind == MintErrorKind.UNKNOWN
        assert outcome.error == "Contract address is invalid: 0x1234"
        assert harness.orchestrator.state == OrchestratorState.ERROR
        assert harness.orchestrator.is_busy is False

    @pytest.mark.asyncio
    async def test_mint_unexpected_exception(self, harness):
        await harness.session.connect_wallet()
        harness.orchestrator.result = GenerationResult(**TestDataGenerator.generate_response())
        harness.contract_factory.side_effect = ValueError("Unknown format '0x1234'")

        outcome = await harness.orchestrator.handle_mint()

        assert outcome.error_kind == MintErrorKind.UNKNOWN
        assert outcome.error == "Failed to mint NFT: Unknown format '0x1234'"
        assert harness.orchestrator.state == OrchestratorState.ERROR
        assert harness.orchestrator.error == outcome.error
        assert harness.orchestrator.result is not None

    @pytest.mark.asyncio
    async def test_generate_state_file_unwritable(self, harness, monkeypatch):
        """状态文件写入失败不影响本次生成结果"""
        await harness.session.connect_wallet()
        harness.orchestrator.set_prompt("a robotic turtle")
        monkeypatch.setattr(harness.store, "save", MagicMock(side_effect=PermissionError("read-only")))

        result = await harness.orchestrator.handle_generate()

        assert result.metadata_url == METADATA_URL
        assert harness.orchestrator.state == OrchestratorState.GENERATED
        assert harness.orchestrator.is_busy is False

    @pytest.mark.asyncio
    async def test_busy_guard(self, harness):
        await harness.session.connect_wallet()
        harness.orchestrator.result = GenerationResult(**TestDataGenerator.generate_response())
        harness.orchestrator._busy = True

        outcome = await harness.orchestrator.handle_mint()

        assert outcome.success is False
        harness.contract_factory.assert_not_called()

    def test_restore(self, harness):
        harness.store.save("a robotic turtle", GenerationResult(**TestDataGenerator.generate_response()))

        assert harness.orchestrator.restore() is True

        assert harness.orchestrator.prompt == "a robotic turtle"
        assert harness.orchestrator.state == OrchestratorState.GENERATED
        assert harness.orchestrator.metadata_url == METADATA_URL

    def test_restore_without_saved_state(self, harness):
        assert harness.orchestrator.restore() is False
        assert harness.orchestrator.state == OrchestratorState.IDLE
