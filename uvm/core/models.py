"""核心数据模型

拉取状态与各命令的执行结果集中定义，供服务层与 CLI 共用。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FetchStatus(str, Enum):
    """单个依赖的拉取结果"""
    INSTALLED = "installed"
    ALREADY_LOCAL = "already_local"
    FETCH_FAILED = "fetch_failed"

    @property
    def ok(self) -> bool:
        return self is not FetchStatus.FETCH_FAILED


@dataclass
class InstallReport:
    """install 汇总：按清单顺序记录每个条目的拉取结果（重复条目各记一次）"""

    results: list[tuple[str, FetchStatus]] = field(default_factory=list)

    def record(self, name: str, status: FetchStatus) -> None:
        self.results.append((name, status))

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> list[str]:
        return [n for n, s in self.results if s.ok]

    @property
    def failed(self) -> list[str]:
        return [n for n, s in self.results if not s.ok]

    @property
    def success(self) -> bool:
        return not self.failed


@dataclass
class GetResult:
    """get 结果"""

    name: str
    fetch_status: FetchStatus
    added: bool  # False 表示已是依赖，清单未改动


@dataclass
class UninstallResult:
    """uninstall 结果"""

    name: str
    dir_removed: bool
    delisted: bool  # False 表示清单中本无此依赖


@dataclass
class InitResult:
    """init 结果：每个模板文件是否新建（False 表示已存在被跳过）"""

    created: dict[str, bool] = field(default_factory=dict)
