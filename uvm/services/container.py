"""服务容器：统一依赖注入

清单存储、拉取器、安装服务均通过容器按 Config 懒加载，
同一容器内共享实例。CLI 通过 get_container() 获取服务。

用法:
    container = ServiceContainer()
    container.installer.install_all()

    # 显式注入配置
    cfg = Config.from_file("uvm.yml")
    container = ServiceContainer(config=cfg)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uvm.core.config import Config
    from uvm.core.fetcher import RepoFetcher
    from uvm.core.manifest import ManifestStore
    from uvm.services.install_service import InstallService
    from uvm.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(
        self,
        config: Config | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from uvm.core.config import get_config
            config = get_config()
        self._config = config
        self._executor = executor

    @property
    def config(self) -> Config:
        return self._config

    @property
    def manifest(self) -> ManifestStore:
        if "manifest" not in self._instances:
            from uvm.core.manifest import ManifestStore
            self._instances["manifest"] = ManifestStore(self._config.manifest_file)
        return self._instances["manifest"]  # type: ignore[return-value]

    @property
    def fetcher(self) -> RepoFetcher:
        if "fetcher" not in self._instances:
            from uvm.core.fetcher import RepoFetcher
            cfg = self._config
            self._instances["fetcher"] = RepoFetcher(
                modules_dir=cfg.modules_dir,
                remote_base_url=cfg.remote_base_url,
                executor=self._executor,
                git_bin=cfg.git_bin,
                clone_depth=cfg.clone_depth,
                strip_dirs=cfg.strip_dirs,
                retries=cfg.fetch_retries,
                timeout=cfg.fetch_timeout or None,
            )
        return self._instances["fetcher"]  # type: ignore[return-value]

    @property
    def installer(self) -> InstallService:
        if "installer" not in self._instances:
            from uvm.services.install_service import InstallService
            self._instances["installer"] = InstallService(
                store=self.manifest,
                fetcher=self.fetcher,
                attributes_file=self._config.attributes_file,
                default_project_name=self._config.default_project_name,
            )
        return self._instances["installer"]  # type: ignore[return-value]


# ---- 全局单例 ----

_global: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例"""
    global _global  # noqa: PLW0603
    if _global is None:
        _global = ServiceContainer()
    return _global


def reset_container() -> None:
    """重置全局容器（CLI 重新加载配置或测试时使用）"""
    global _global  # noqa: PLW0603
    _global = None
