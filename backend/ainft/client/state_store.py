"""
生成状态持久化
把进行中的生成结果写入JSON文件，重启后可以恢复
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union

from ainft.core.config import settings
from ainft.core.log_utils import get_logger
from ainft.client.generation_client import GenerationResult
from ainft.utils.config_utils import ensure_directory_exists

logger = get_logger(__name__)


class GenerationStateStore:
    """JSON文件存储"""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or settings.absolute_client_state_file)

    def save(self, prompt: str, result: GenerationResult) -> None:
        ensure_directory_exists(self.path.parent)
        payload = {
            "prompt": prompt,
            "result": result.model_dump(),
            "saved_at": datetime.now().isoformat(),
        }
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)
        logger.info("生成状态已保存", state_file=str(self.path))

    def load(self) -> Optional[Tuple[str, GenerationResult]]:
        """
        读取保存的状态

        Returns:
            (prompt, result)，没有保存的状态时返回None
        """
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return payload.get("prompt", ""), GenerationResult(**payload["result"])
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("生成状态文件损坏，已忽略", state_file=str(self.path), reason=str(e))
            return None

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info("生成状态已清除", state_file=str(self.path))
