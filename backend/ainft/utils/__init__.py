"""
通用工具模块包
"""

from .config_utils import (
    get_project_root,
    load_env_file,
    get_workspace_path,
    get_config_path,
    parse_json_config,
    ensure_directory_exists,
)
from .string_utils import truncate_string, is_blank, mask_sensitive_info

__all__ = [
    "get_project_root",
    "load_env_file",
    "get_workspace_path",
    "get_config_path",
    "parse_json_config",
    "ensure_directory_exists",
    "truncate_string",
    "is_blank",
    "mask_sensitive_info",
]
