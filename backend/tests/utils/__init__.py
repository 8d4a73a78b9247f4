"""
测试工具包
提供统一的测试工具和辅助函数
"""

from .mock_utils import MockBuilder, ScriptedWallet, mock_settings
from .test_data_utils import TestDataGenerator

__all__ = [
    'MockBuilder',
    'ScriptedWallet',
    'mock_settings',
    'TestDataGenerator',
]
