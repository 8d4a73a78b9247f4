"""
配置工具模块
项目目录定位、.env文件加载和配置值解析
"""

import os
import json
import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

# backend/ainft/utils/config_utils.py -> 项目根目录
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def get_project_root() -> Path:
    return PROJECT_ROOT


def _project_dir(name: str, sub_path: str = "") -> Path:
    directory = PROJECT_ROOT / name
    return directory / sub_path if sub_path else directory


def get_workspace_path(sub_path: str = "") -> Path:
    """workspace目录，存放SQLite数据库、日志和客户端状态"""
    return _project_dir("workspace", sub_path)


def get_config_path(sub_path: str = "") -> Path:
    """config目录，存放.env文件"""
    return _project_dir("config", sub_path)


def load_env_file(env_file_path: Path) -> bool:
    """
    把.env文件写入环境变量，已存在的变量保持不变

    支持 `export KEY=VALUE` 写法，值两侧的引号会被去掉

    Returns:
        bool: 文件存在并读取成功时返回True
    """
    if not env_file_path.exists():
        return False

    try:
        lines = env_file_path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.warning(f"读取环境变量文件失败 {env_file_path}: {e}")
        return False

    loaded = 0
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, value = (part.strip() for part in line.split("=", 1))
        if key and key not in os.environ:
            os.environ[key] = value.strip('"').strip("'")
            loaded += 1

    logger.info(f"已加载环境变量文件 {env_file_path}，新增 {loaded} 项")
    return True


def parse_json_config(value: Union[str, List[str]]) -> List[str]:
    """解析列表配置，支持JSON数组和逗号分隔两种写法"""
    if isinstance(value, list):
        return value
    if not value or not value.strip():
        return []

    text = value.strip()
    if text.startswith("["):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            logger.warning(f"JSON配置解析失败: {value}")
            return []
    return [item.strip() for item in text.split(",") if item.strip()]


def ensure_directory_exists(path: Path) -> None:
    if not path.exists():
        path.mkdir(parents=True, exist_ok=True)
        logger.info(f"创建目录: {path}")
