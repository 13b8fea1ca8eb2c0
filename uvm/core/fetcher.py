"""代码仓拉取器

职责:
- 本地优先：umods/<name> 已存在则直接跳过，不访问网络
- git clone --depth 1 <remote>/<name>.git umods/<name>
- 拉取失败时删除残留目录，保证重试时会重新拉取
- 拉取成功后清理 .git / .vscode 等版本控制与编辑器目录
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from uvm.core.exceptions import FilesystemError
from uvm.core.models import FetchStatus
from uvm.utils.names import validate_dep_name
from uvm.utils.shell import CommandExecutor, get_executor

logger = logging.getLogger(__name__)


class RepoFetcher:
    """按名称把代码仓物化到模块根目录下"""

    def __init__(
        self,
        modules_dir: str = "",
        remote_base_url: str = "",
        executor: CommandExecutor | None = None,
        *,
        git_bin: str = "git",
        clone_depth: int = 1,
        strip_dirs: list[str] | None = None,
        retries: int = 0,
        timeout: int | None = None,
    ) -> None:
        if not modules_dir or not remote_base_url:
            from uvm.core.config import get_config
            cfg = get_config()
            modules_dir = modules_dir or cfg.modules_dir
            remote_base_url = remote_base_url or cfg.remote_base_url
        self.modules_dir = Path(modules_dir)
        self.remote_base_url = remote_base_url.rstrip("/")
        self.executor = executor or get_executor()
        self.git_bin = git_bin
        self.clone_depth = clone_depth
        self.strip_dirs = list(strip_dirs) if strip_dirs is not None else [".git", ".vscode"]
        self.retries = max(retries, 0)
        self.timeout = timeout

    def target_path(self, name: str) -> Path:
        return self.modules_dir / name

    def repo_url(self, name: str) -> str:
        return f"{self.remote_base_url}/{name}.git"

    def is_local(self, name: str) -> bool:
        return self.target_path(name).exists()

    def fetch(self, name: str) -> FetchStatus:
        """确保 umods/<name> 存在

        Raises:
            InvalidArgsError: 依赖名非法
            FilesystemError: 模块根目录无法创建，或残留目录无法清理
        """
        validate_dep_name(name)
        dest = self.target_path(name)

        # ---- 1. 本地优先 ----
        if dest.exists():
            logger.info("'%s' 已存在于本地，跳过下载: %s", name, dest)
            return FetchStatus.ALREADY_LOCAL

        # ---- 2. 确保模块根目录存在 ----
        try:
            self.modules_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"无法创建目录 '{self.modules_dir}': {e}") from e

        # ---- 3. 远程拉取（可选有限重试） ----
        logger.info("--- 拉取 '%s' ---", name)
        for attempt in range(1, self.retries + 2):
            if self._clone(name, dest):
                break
            self._discard(dest)
            if attempt <= self.retries:
                logger.warning("拉取 '%s' 失败，重试 (%d/%d)", name, attempt, self.retries)
        else:
            logger.error("拉取 '%s' 失败，请检查名称: %s", name, self.repo_url(name))
            return FetchStatus.FETCH_FAILED

        # ---- 4. 清理版本控制/编辑器目录 ----
        self._strip(dest)
        logger.info("'%s' 已安装到 %s/", name, self.modules_dir)
        return FetchStatus.INSTALLED

    def remove(self, name: str) -> bool:
        """删除本地模块目录，返回是否实际删除（不存在不算错误）

        Raises:
            InvalidArgsError: 依赖名非法
            FilesystemError: 删除失败
        """
        validate_dep_name(name)
        dest = self.target_path(name)
        if not dest.exists():
            return False
        logger.info("删除目录 '%s'", dest)
        try:
            if dest.is_dir() and not dest.is_symlink():
                shutil.rmtree(dest)
            else:
                dest.unlink()
        except OSError as e:
            raise FilesystemError(f"无法删除 '{dest}': {e}") from e
        return True

    # ------------------------------------------------------------------
    # 内部步骤
    # ------------------------------------------------------------------

    def _clone(self, name: str, dest: Path) -> bool:
        cmd = [
            self.git_bin, "clone", "--depth", str(self.clone_depth),
            self.repo_url(name), str(dest),
        ]
        try:
            r = self.executor.execute(cmd, timeout=self.timeout)
        except (OSError, subprocess.SubprocessError) as e:
            logger.error("无法执行 %s: %s", self.git_bin, e)
            return False
        if not r.success:
            logger.error(
                "git clone 失败 (rc=%d): %s", r.returncode, r.stderr.strip()[:300],
            )
            return False
        return True

    def _discard(self, dest: Path) -> None:
        """删除失败拉取留下的残留目录"""
        if not dest.exists():
            return
        logger.info("清理残留目录: %s", dest)
        try:
            shutil.rmtree(dest)
        except OSError as e:
            raise FilesystemError(f"无法清理残留目录 '{dest}': {e}") from e

    def _strip(self, dest: Path) -> None:
        logger.info("清理代码仓文件: %s", ", ".join(self.strip_dirs))
        for sub in self.strip_dirs:
            path = dest / sub
            if path.is_dir():
                shutil.rmtree(path, ignore_errors=True)
            elif path.exists():
                path.unlink(missing_ok=True)
