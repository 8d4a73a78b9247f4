"""
链上操作异常定义
"""

from typing import Any, Dict, Optional

# EIP-1193 / MetaMask 错误码
USER_REJECTED_REQUEST = 4001
UNAUTHORIZED = 4100
UNSUPPORTED_METHOD = 4200
UNRECOGNIZED_CHAIN = 4902


class ChainError(Exception):
    """
    链上操作基础异常

    Attributes:
        message: 错误消息
        code: 错误码
        details: 错误详情
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ContractConfigurationError(ChainError):
    """合约地址等配置缺失"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIG_ERROR", details=details)


class WalletNotFoundError(ChainError):
    """未检测到钱包"""

    def __init__(self, message: str = "Wallet is not installed! Please install MetaMask.") -> None:
        super().__init__(message, code="WALLET_NOT_FOUND")


class WalletRpcError(ChainError):
    """钱包RPC请求错误，rpc_code为EIP-1193错误码"""

    def __init__(self, rpc_code: int, message: str, data: Any = None) -> None:
        super().__init__(message, code="WALLET_RPC_ERROR", details={"rpc_code": rpc_code, "data": data})
        self.rpc_code = rpc_code
        self.data = data


class TransactionFailedError(ChainError):
    """交易上链后执行失败"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="TX_FAILED", details=details)


__all__ = [
    "USER_REJECTED_REQUEST",
    "UNAUTHORIZED",
    "UNSUPPORTED_METHOD",
    "UNRECOGNIZED_CHAIN",
    "ChainError",
    "ContractConfigurationError",
    "WalletNotFoundError",
    "WalletRpcError",
    "TransactionFailedError",
]
