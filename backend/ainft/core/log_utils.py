"""
统一日志管理模块

业务代码通过 get_logger(__name__) 获取 UnifiedLogger：
    logger.info(log_messages.MINT_SUBMITTED, tx_hash=tx_hash, gas_limit=gas_limit)
关键字参数既用于填充消息模板，也原样写入日志记录的 extra 字段。
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ainft.core.config import settings
from ainft.core.log_messages import log_messages

# LogRecord自带的属性，不能出现在extra中
_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class UnifiedLogger:
    """统一的业务日志记录器"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.name = name

    def _extra(self, **kwargs: Any) -> Dict[str, Any]:
        data = log_messages.get_structured_data(log_module=self.name, **kwargs)
        return {
            (f"ctx_{key}" if key in _RESERVED_RECORD_KEYS else key): value
            for key, value in data.items()
        }

    @staticmethod
    def _render(message_template: str, **kwargs: Any) -> str:
        """只有提供了参数时才格式化，已经格式化过的字符串原样输出"""
        if not kwargs:
            return message_template
        try:
            return log_messages.format_message(message_template, **kwargs)
        except (KeyError, ValueError, IndexError):
            return message_template

    def _log(self, level: int, message_template: str, **kwargs: Any) -> None:
        getattr(self.logger, logging.getLevelName(level).lower())(
            self._render(message_template, **kwargs),
            extra=self._extra(**kwargs)
        )

    def info(self, message_template: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message_template, **kwargs)

    def warning(self, message_template: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message_template, **kwargs)

    def critical(self, message_template: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message_template, **kwargs)

    def debug(self, message_template: str, **kwargs: Any) -> None:
        """仅在 app_debug 开启时输出"""
        if settings.app_debug:
            self._log(logging.DEBUG, message_template, **kwargs)

    def error(self, message_template: str, exception: Optional[Exception] = None, **kwargs: Any) -> None:
        """
        记录错误日志

        Args:
            message_template: 日志消息
            exception: 异常对象，提供时附带异常类型、消息和堆栈
            **kwargs: 格式化参数
        """
        message = self._render(message_template, **kwargs)
        extra = self._extra(**kwargs)
        if exception is None:
            self.logger.error(message, extra=extra)
            return

        extra["exception_type"] = type(exception).__name__
        extra["exception_message"] = str(exception)
        self.logger.error(message, extra=extra, exc_info=exception)


_loggers: Dict[str, UnifiedLogger] = {}


def get_logger(name: str = __name__) -> UnifiedLogger:
    """按名称缓存的 UnifiedLogger"""
    if name not in _loggers:
        _loggers[name] = UnifiedLogger(name)
    return _loggers[name]


def setup_logging() -> None:
    """配置根日志：workspace/log 下的文件输出和标准输出"""
    level = logging.DEBUG if settings.app_debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    log_dir = Path(settings.workspace_dir) / "log"
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(settings.log_format)
    file_handler = logging.FileHandler(log_dir / settings.log_file, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # 第三方库只输出警告以上
    for logger_name in ("uvicorn", "fastapi", "sqlalchemy", "aiosqlite", "httpx", "httpcore", "web3", "mlflow"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    get_logger(__name__).info(log_messages.OPERATION_SUCCESS, operation_name="日志系统配置")
