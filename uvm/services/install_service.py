"""安装编排服务

串联清单 (ManifestStore) 与拉取器 (RepoFetcher)，实现各 CLI 命令:

  init       创建默认清单与 .gitattributes（已存在则跳过）
  get        拉取单个依赖并追加到清单
  install    按清单顺序逐个拉取，单个失败不中断
  uninstall  删除本地目录，再从清单移除
  list       列出清单中的依赖及本地是否存在

清单是"应有哪些依赖"的唯一来源；umods/ 只是可再生的本地缓存。
"""

from __future__ import annotations

import logging
from pathlib import Path

from uvm.core.exceptions import (
    AlreadyPresentError,
    FetchFailedError,
    ManifestMissingError,
    NotListedError,
    UvmError,
)
from uvm.core.fetcher import RepoFetcher
from uvm.core.manifest import ManifestStore
from uvm.core.models import (
    FetchStatus,
    GetResult,
    InitResult,
    InstallReport,
    UninstallResult,
)
from uvm.utils.file_io import write_if_absent
from uvm.utils.names import validate_dep_name

logger = logging.getLogger(__name__)

GITATTRIBUTES_TEMPLATE = (
    "# Tell GitHub's Linguist how to classify .gi files\n"
    "*.gi linguist-language=Unnarize\n"
)


class InstallService:
    """依赖安装/卸载编排"""

    def __init__(
        self,
        store: ManifestStore,
        fetcher: RepoFetcher,
        attributes_file: str = ".gitattributes",
        default_project_name: str = "my-unnarize-project",
    ) -> None:
        self.store = store
        self.fetcher = fetcher
        self.attributes_file = Path(attributes_file)
        self.default_project_name = default_project_name

    # ---- init ----

    def init_project(self, project_name: str = "") -> InitResult:
        """创建默认清单与语言识别文件，已存在的逐个跳过"""
        result = InitResult()
        result.created[str(self.store.path)] = self.store.create(
            project_name or self.default_project_name,
        )
        result.created[str(self.attributes_file)] = write_if_absent(
            self.attributes_file, GITATTRIBUTES_TEMPLATE,
        )
        return result

    # ---- get ----

    def get(self, name: str) -> GetResult:
        """拉取依赖并加入清单

        已是依赖时仍会确保本地存在，但不改写清单。

        Raises:
            InvalidArgsError: 依赖名非法
            ManifestMissingError: 清单不存在
            MalformedManifestError: 清单内容非法
            FetchFailedError: 拉取失败（清单不变）
        """
        validate_dep_name(name)
        self._require_manifest()

        status = self.fetcher.fetch(name)
        if status is FetchStatus.FETCH_FAILED:
            raise FetchFailedError(f"拉取代码仓 '{name}' 失败，请检查名称")

        doc = self.store.load()
        try:
            updated = doc.add(name)
        except AlreadyPresentError:
            logger.info("'%s' 已是依赖项，清单未改动", name)
            return GetResult(name=name, fetch_status=status, added=False)

        self.store.save(updated)
        return GetResult(name=name, fetch_status=status, added=True)

    # ---- install ----

    def install_all(self) -> InstallReport:
        """按清单顺序拉取全部依赖，单个失败继续处理后续条目

        不修改清单。
        """
        doc = self.store.load()
        report = InstallReport()
        for name in doc:
            try:
                report.record(name, self.fetcher.fetch(name))
            except UvmError as exc:
                # 非法依赖名或目录错误只影响当前条目
                logger.error("拉取失败: %s - %s", name, exc)
                report.record(name, FetchStatus.FETCH_FAILED)
        if report.failed:
            logger.warning(
                "拉取汇总: %d 成功, %d 失败 (%s)",
                len(report.succeeded), len(report.failed), ", ".join(report.failed),
            )
        return report

    # ---- uninstall ----

    def uninstall(self, name: str) -> UninstallResult:
        """删除本地目录（不存在不算错误），再从清单移除

        清单中本无此依赖时不写清单，也不视为错误。

        Raises:
            InvalidArgsError: 依赖名非法
            ManifestMissingError: 清单不存在
            MalformedManifestError: 清单内容非法
            FilesystemError: 目录删除或清单写入失败
        """
        validate_dep_name(name)
        self._require_manifest()

        dir_removed = self.fetcher.remove(name)
        if not dir_removed:
            logger.info("本地没有 '%s' 的目录，继续检查清单", name)

        doc = self.store.load()
        try:
            updated = doc.remove(name)
        except NotListedError:
            return UninstallResult(name=name, dir_removed=dir_removed, delisted=False)

        self.store.save(updated)
        return UninstallResult(name=name, dir_removed=dir_removed, delisted=True)

    # ---- list ----

    def list_dependencies(self) -> list[tuple[str, bool]]:
        """按清单顺序返回 (依赖名, 本地是否存在)"""
        doc = self.store.load()
        return [(name, self.fetcher.is_local(name)) for name in doc]

    def _require_manifest(self) -> None:
        if not self.store.exists():
            raise ManifestMissingError(
                f"未找到 '{self.store.path}'，请先执行 'uvm init'"
            )
