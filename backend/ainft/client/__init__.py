"""
客户端模块
调用后端生成接口，并通过钱包会话完成铸造
"""

from ainft.client.generation_client import (
    GenerationClient,
    GenerationClientError,
    GenerationResult,
    InvalidPromptError,
)
from ainft.client.mint_orchestrator import MintOrchestrator, MintOutcome, OrchestratorState
from ainft.client.state_store import GenerationStateStore

__all__ = [
    "GenerationClient",
    "GenerationClientError",
    "GenerationResult",
    "InvalidPromptError",
    "MintOrchestrator",
    "MintOutcome",
    "OrchestratorState",
    "GenerationStateStore",
]
