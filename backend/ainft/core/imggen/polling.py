"""
预测任务轮询
按固定间隔查询任务状态，直到成功、失败或超时
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from ainft.core.log_utils import get_logger
from ainft.core.log_messages import log_messages
from .models import PollOutcome, PollStatus

logger = get_logger(__name__)

SUCCESS_STATUSES = frozenset({"succeeded"})
FAILURE_STATUSES = frozenset({"failed", "canceled"})


async def poll_prediction(
    fetch_prediction: Callable[[], Awaitable[Dict[str, Any]]],
    interval: float = 1.0,
    timeout: Optional[float] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> PollOutcome:
    """
    轮询预测任务直到进入终止状态

    Args:
        fetch_prediction: 查询一次任务状态的协程函数，返回任务数据字典
        interval: 两次查询之间的间隔（秒）
        timeout: 轮询总时长上限（秒），None表示不限制
        sleep: 等待函数
        clock: 单调时钟

    Returns:
        PollOutcome: 轮询结果，不会因任务失败或超时而抛出异常
    """
    started = clock()
    attempts = 0

    while True:
        prediction = await fetch_prediction()
        attempts += 1
        status = prediction.get("status")
        elapsed = clock() - started

        logger.info(log_messages.PREDICTION_STATUS, status=status, attempt=attempts)

        if status in SUCCESS_STATUSES:
            return PollOutcome(
                status=PollStatus.SUCCEEDED,
                prediction=prediction,
                attempts=attempts,
                elapsed=elapsed
            )

        if status in FAILURE_STATUSES:
            return PollOutcome(
                status=PollStatus.FAILED,
                prediction=prediction,
                error=prediction.get("error") or "Unknown error",
                attempts=attempts,
                elapsed=elapsed
            )

        if timeout is not None and elapsed >= timeout:
            logger.warning(
                log_messages.PREDICTION_TIMEOUT,
                prediction_id=prediction.get("id"),
                attempts=attempts,
                elapsed=elapsed
            )
            return PollOutcome(
                status=PollStatus.TIMED_OUT,
                prediction=prediction,
                error=f"Prediction timed out after {timeout:g} seconds",
                attempts=attempts,
                elapsed=elapsed
            )

        await sleep(interval)
