"""
字符串工具模块
"""

from typing import List, Optional


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """超过max_length时截断并追加suffix，结果总长度不超过max_length"""
    if len(text) <= max_length:
        return text
    keep = max(max_length - len(suffix), 0)
    return (text[:keep] + suffix)[:max_length]


def is_blank(text: Optional[str]) -> bool:
    """None、空串和纯空白都视为空"""
    return text is None or not text.strip()


def mask_sensitive_info(text: str, sensitive_keys: Optional[List[str]] = None) -> str:
    """
    遮蔽密钥类文本，仅保留首尾各4个字符

    Args:
        text: 原始文本（如API密钥、私钥、带密钥的RPC地址）
        sensitive_keys: 需要额外整体遮蔽的子串

    Returns:
        str: 遮蔽后的文本
    """
    if not text:
        return ""

    masked = text
    for key in sensitive_keys or []:
        if key:
            masked = masked.replace(key, "*" * 8)

    if len(masked) <= 8:
        return "*" * len(masked)
    return f"{masked[:4]}{'*' * 8}{masked[-4:]}"
