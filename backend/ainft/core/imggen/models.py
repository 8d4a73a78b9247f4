"""
图片生成数据模型
定义图片生成相关的数据结构
"""

import enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any


@dataclass
class ImageGenerationResult:
    """图片生成结果

    Attributes:
        success: 是否生成成功
        image_url: 生成的图片URL（成功时）
        error_message: 错误消息（失败时）
        metadata: 额外的元数据信息
    """
    success: bool
    image_url: Optional[str] = None
    error_message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class PollStatus(str, enum.Enum):
    """预测任务轮询的终止状态"""
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass
class PollOutcome:
    """预测任务轮询结果

    Attributes:
        status: 终止状态
        prediction: 最后一次查询到的预测任务数据
        error: 失败原因（FAILED/TIMED_OUT时）
        attempts: 状态查询次数
        elapsed: 轮询耗时（秒）
    """
    status: PollStatus
    prediction: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    attempts: int = 0
    elapsed: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status == PollStatus.SUCCEEDED
