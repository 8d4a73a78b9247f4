"""
铸造流程
估算Gas并加缓冲 -> 提交交易 -> 等待确认 -> 解析tokenId
"""

from typing import Optional

from ainft.core.config import settings
from ainft.core.log_utils import get_logger
from ainft.core.log_messages import log_messages
from ainft.core.chain.contract import MintReceipt, NFTContract
from ainft.core.chain.mint_errors import (
    MintError,
    MintErrorKind,
    MintStage,
    classify_mint_error,
    describe_mint_error,
)

logger = get_logger(__name__)


def apply_buffer(value: int, percent: int) -> int:
    """按百分比上浮，结果取整"""
    return value * (100 + percent) // 100


async def mint_token(
    contract: NFTContract,
    recipient: str,
    token_uri: str,
    confirmations: Optional[int] = None,
) -> MintReceipt:
    """
    铸造一个NFT

    Gas估算失败时使用固定Gas上限重试一次。

    Args:
        contract: 绑定签名者的合约句柄
        recipient: 接收地址
        token_uri: 元数据地址
        confirmations: 等待的确认数，默认取配置

    Returns:
        MintReceipt: 铸造结果

    Raises:
        MintError: 已分类的铸造失败
    """
    confirmations = settings.mint_confirmations if confirmations is None else confirmations
    logger.info(log_messages.MINT_START, recipient=recipient, token_uri=token_uri)

    stage = MintStage.ESTIMATE
    used_fallback = False
    tx_hash = None
    try:
        gas_price = apply_buffer(await contract.current_gas_price(), settings.mint_gas_price_buffer_percent)
        try:
            estimated = await contract.estimate_mint_gas(recipient, token_uri)
            gas_limit = apply_buffer(estimated, settings.mint_gas_limit_buffer_percent)
        except Exception as e:
            if classify_mint_error(e, MintStage.ESTIMATE) != MintErrorKind.GAS_ESTIMATION:
                raise
            gas_limit = settings.mint_fallback_gas_limit
            used_fallback = True
            logger.warning(log_messages.MINT_GAS_FALLBACK, gas_limit=gas_limit, reason=str(e))

        stage = MintStage.SUBMIT
        tx_hash = await contract.mint_nft(recipient, token_uri, gas=gas_limit, gas_price=gas_price)
        logger.info(log_messages.MINT_SUBMITTED, tx_hash=tx_hash, gas_limit=gas_limit, gas_price=gas_price)

        stage = MintStage.CONFIRM
        receipt = await contract.wait_for_confirmations(
            tx_hash,
            confirmations=confirmations,
            timeout=settings.mint_receipt_timeout,
            poll_interval=settings.mint_confirmation_poll_interval
        )
        result = contract.extract_mint_receipt(receipt, tx_hash)

    except Exception as e:
        # 固定Gas重试仍失败时归为估算失败
        classify_stage = MintStage.ESTIMATE if used_fallback and stage == MintStage.SUBMIT else stage
        kind = classify_mint_error(e, classify_stage)
        logger.error(log_messages.MINT_FAILED, exception=e, stage=stage.value, error_kind=kind.value)
        raise MintError(
            kind,
            describe_mint_error(kind, str(e)),
            details={"stage": stage.value, "transaction_hash": tx_hash}
        ) from e

    logger.info(log_messages.MINT_SUCCESS, token_id=result.token_id, tx_hash=tx_hash)
    return result
