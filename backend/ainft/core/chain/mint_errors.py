"""
铸造错误分类
把底层异常归入有限的错误类型，界面层按类型映射提示语
"""

import enum
from typing import Any, Dict, Optional, Tuple

from ainft.core.config import settings
from ainft.core.chain.exceptions import USER_REJECTED_REQUEST, ChainError, WalletRpcError
from ainft.utils.string_utils import truncate_string

# 节点返回余额不足时使用的JSON-RPC错误码
INSUFFICIENT_FUNDS_RPC_CODES = frozenset({-32000, -32003, -32010})


class MintErrorKind(str, enum.Enum):
    """铸造失败类型"""
    GAS_ESTIMATION = "gas_estimation"
    USER_REJECTED = "user_rejected"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNKNOWN = "unknown"


class MintStage(str, enum.Enum):
    """铸造阶段"""
    ESTIMATE = "estimate"
    SUBMIT = "submit"
    CONFIRM = "confirm"


MINT_ERROR_MESSAGES: Dict[MintErrorKind, str] = {
    MintErrorKind.GAS_ESTIMATION: (
        "Failed to estimate gas. The contract might be paused or you might not have permission to mint."
    ),
    MintErrorKind.USER_REJECTED: "Transaction was rejected in your wallet.",
    MintErrorKind.INSUFFICIENT_FUNDS: (
        "Insufficient funds to pay for gas. Please add some Sepolia ETH to your wallet."
    ),
}


def _rpc_error(exc: BaseException) -> Tuple[Optional[int], str]:
    """提取节点返回的错误码和错误消息"""
    rpc_response = getattr(exc, "rpc_response", None)
    if isinstance(rpc_response, dict) and isinstance(rpc_response.get("error"), dict):
        error = rpc_response["error"]
        return error.get("code"), str(error.get("message", ""))

    if exc.args and isinstance(exc.args[0], dict):
        error: Dict[str, Any] = exc.args[0]
        return error.get("code"), str(error.get("message", ""))

    return None, str(exc)


def is_insufficient_funds(exc: BaseException) -> bool:
    code, message = _rpc_error(exc)
    if code is not None and code not in INSUFFICIENT_FUNDS_RPC_CODES:
        return False
    return "insufficient funds" in message.lower()


def classify_mint_error(exc: BaseException, stage: MintStage) -> MintErrorKind:
    """
    判断铸造失败类型

    Args:
        exc: 底层异常
        stage: 失败发生的阶段

    Returns:
        MintErrorKind: 失败类型
    """
    if isinstance(exc, WalletRpcError) and exc.rpc_code == USER_REJECTED_REQUEST:
        return MintErrorKind.USER_REJECTED
    if is_insufficient_funds(exc):
        return MintErrorKind.INSUFFICIENT_FUNDS
    if stage == MintStage.ESTIMATE:
        return MintErrorKind.GAS_ESTIMATION
    return MintErrorKind.UNKNOWN


def describe_mint_error(kind: MintErrorKind, raw_message: str = "", max_length: Optional[int] = None) -> str:
    """把失败类型映射为用户可读的提示，未知错误保留截断后的原始信息"""
    if kind in MINT_ERROR_MESSAGES:
        return MINT_ERROR_MESSAGES[kind]

    limit = max_length if max_length is not None else settings.mint_error_max_length
    detail = truncate_string(raw_message or "Unknown error", limit)
    return f"Failed to mint NFT: {detail}"


class MintError(ChainError):
    """铸造失败，携带失败类型"""

    def __init__(self, kind: MintErrorKind, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code=kind.value, details=details)
        self.kind = kind
