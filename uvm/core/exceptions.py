"""统一异常体系

所有业务异常继承 UvmError。
CLI 层捕获 UvmError 输出友好提示并以非零状态退出。
"""

from __future__ import annotations


class UvmError(Exception):
    """uvm 基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ManifestMissingError(UvmError):
    """清单文件不存在"""

    code = "MANIFEST_MISSING"


class MalformedManifestError(UvmError):
    """清单内容无法解析，或 dependencies 数组缺失/非法"""

    code = "MALFORMED_MANIFEST"


class AlreadyPresentError(UvmError):
    """依赖已在清单中"""

    code = "ALREADY_PRESENT"

    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' 已是依赖项")
        self.name = name


class NotListedError(UvmError):
    """依赖不在清单中"""

    code = "NOT_LISTED"

    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' 不在依赖列表中")
        self.name = name


class FetchFailedError(UvmError):
    """代码仓拉取失败"""

    code = "FETCH_FAILED"


class FilesystemError(UvmError):
    """目录创建或删除失败"""

    code = "FILESYSTEM_ERROR"


class InvalidArgsError(UvmError):
    """命令参数或依赖名非法"""

    code = "INVALID_ARGS"
