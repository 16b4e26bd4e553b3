"""名称清洗：把用户提供的视频名、直播名、分片名规范为安全的路径组件。"""
from __future__ import annotations

import re
import time

_SEPARATORS = re.compile(r"[\\/]")
_UNSAFE_RUN = re.compile(r"[^A-Za-z0-9_-]+")


def sanitize_component(raw: str | None) -> str:
    """只保留最后一个路径组件，结果拼接到根目录后不可能逃逸出根目录。

    "."、".." 以及含 NUL 的输入视为无可用名称，返回空串。
    """
    if not raw:
        return ""
    name = _SEPARATORS.split(raw.strip())[-1].strip()
    if name in (".", "..") or "\x00" in name:
        return ""
    return name


def sanitize_upload_name(raw: str | None) -> str:
    """上传时的自由文本名称：在 sanitize_component 基础上只保留字母、数字、- 与 _。

    连续的非法字符折叠为一个 "-"，并去掉首尾的 "-"。可能返回空串，调用方需使用 fallback_name。
    """
    clean = _UNSAFE_RUN.sub("-", sanitize_component(raw))
    return clean.strip("-")


def fallback_name(now: float | None = None) -> str:
    """无可用名称时的后备资产名：upload-<unix 秒>。"""
    if now is None:
        now = time.time()
    return f"upload-{int(now)}"
