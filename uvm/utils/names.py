"""依赖名校验

依赖名会直接作为 umods/ 下的目录名，并拼进远端 URL，
因此只允许安全字符，拒绝路径分隔符与 shell 元字符。
"""

from __future__ import annotations

import re

from uvm.core.exceptions import InvalidArgsError

_SAFE_NAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")


def validate_dep_name(name: str) -> str:
    """校验依赖名，合法时原样返回

    Raises:
        InvalidArgsError: 名称为空、含非法字符、为 "." / ".."，或以 "-" 开头
    """
    if not name:
        raise InvalidArgsError("依赖名不能为空")
    if name in (".", ".."):
        raise InvalidArgsError(f"非法依赖名: {name}")
    if name.startswith("-"):
        raise InvalidArgsError(f"依赖名不能以 '-' 开头: {name}")
    if not _SAFE_NAME_RE.match(name):
        raise InvalidArgsError(
            f"依赖名包含非法字符: {name}（仅允许字母、数字、'.'、'_'、'-'）",
        )
    return name
