"""集中配置管理

所有路径与常量集中在 Config，支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from uvm.utils.file_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "uvm.yml"


@dataclass
class Config:
    """uvm 全局配置"""

    # 工作目录下的文件与目录
    manifest_file: str = "uvmpackage.json"
    modules_dir: str = "umods"
    attributes_file: str = ".gitattributes"

    # init 模板
    default_project_name: str = "my-unnarize-project"

    # 远端与拉取
    remote_base_url: str = "https://github.com/unnarize"
    git_bin: str = "git"
    clone_depth: int = 1
    fetch_retries: int = 0
    fetch_timeout: int = 600
    strip_dirs: list[str] = field(default_factory=lambda: [".git", ".vscode"])

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认

        异常:
            yaml.YAMLError: YAML 格式错误
            ValueError: 文件过大，或字段类型与默认值不一致
        """
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        _check_types(cls(), matched, path)
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg


def _check_types(defaults: Config, values: dict, path: str) -> None:
    for key, value in values.items():
        expected = type(getattr(defaults, key))
        ok = isinstance(value, expected) and not isinstance(value, bool)
        if ok and expected is list:
            ok = all(isinstance(v, str) for v in value)
        if not ok:
            raise ValueError(
                f"{path}: 配置项 '{key}' 应为 {expected.__name__}，"
                f"实际为 {value!r}"
            )


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
