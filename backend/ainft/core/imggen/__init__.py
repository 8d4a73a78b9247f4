"""
图片生成模块
"""

from .base import BaseImageProvider
from .models import ImageGenerationResult, PollOutcome, PollStatus
from .polling import poll_prediction

__all__ = [
    "BaseImageProvider",
    "ImageGenerationResult",
    "PollOutcome",
    "PollStatus",
    "poll_prediction",
]
