"""依赖清单 (uvmpackage.json) 读写

清单是一个 JSON 对象，至少包含:
  - name:          项目名（不校验）
  - dependencies:  依赖名数组，保持插入顺序，添加时去重

所有修改只作用于 dependencies 字段，其余键原样保留（包括键顺序）。
ManifestDocument 的 add/remove 不修改自身，而是返回新文档；
ManifestStore 负责从磁盘加载，以及"写临时文件再 rename"的原子持久化。

用法:
    store = ManifestStore("uvmpackage.json")
    doc = store.load()
    if not doc.contains("foo"):
        store.save(doc.add("foo"))
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from uvm.core.exceptions import (
    AlreadyPresentError,
    FilesystemError,
    MalformedManifestError,
    ManifestMissingError,
    NotListedError,
)
from uvm.utils.file_io import atomic_write

logger = logging.getLogger(__name__)

DEPENDENCIES_KEY = "dependencies"
JSON_INDENT = 2


@dataclass(frozen=True)
class ManifestDocument:
    """已解析的清单文档（不可变语义）"""

    data: dict[str, Any]

    # ------------------------------------------------------------------
    # 构造
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str, source: str = "<manifest>") -> ManifestDocument:
        """从 JSON 文本解析清单

        Raises:
            MalformedManifestError: 非 JSON 对象，或 dependencies 缺失、
                不是数组、含非字符串元素
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedManifestError(f"'{source}' 不是合法的 JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedManifestError(f"'{source}' 顶层必须是 JSON 对象")
        if DEPENDENCIES_KEY not in data:
            raise MalformedManifestError(f"'{source}' 缺少 \"{DEPENDENCIES_KEY}\" 数组")

        deps = data[DEPENDENCIES_KEY]
        if not isinstance(deps, list):
            raise MalformedManifestError(
                f"'{source}' 中 \"{DEPENDENCIES_KEY}\" 必须是数组，"
                f"实际为 {type(deps).__name__}"
            )
        bad = [d for d in deps if not isinstance(d, str)]
        if bad:
            raise MalformedManifestError(
                f"'{source}' 中 \"{DEPENDENCIES_KEY}\" 只能包含字符串: {bad!r}"
            )
        return cls(data=data)

    @classmethod
    def default(cls, project_name: str) -> ManifestDocument:
        """init 使用的默认模板"""
        return cls(data={"name": project_name, DEPENDENCIES_KEY: []})

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    @property
    def dependencies(self) -> list[str]:
        """按存储顺序返回依赖名（副本）"""
        return list(self.data[DEPENDENCIES_KEY])

    def __iter__(self) -> Iterator[str]:
        return iter(self.dependencies)

    def __len__(self) -> int:
        return len(self.data[DEPENDENCIES_KEY])

    def contains(self, name: str) -> bool:
        """精确匹配，不做子串查找"""
        return name in self.data[DEPENDENCIES_KEY]

    # ------------------------------------------------------------------
    # 修改（返回新文档）
    # ------------------------------------------------------------------

    def add(self, name: str) -> ManifestDocument:
        """追加依赖到末尾

        Raises:
            AlreadyPresentError: 已存在（文档不变）
        """
        if self.contains(name):
            raise AlreadyPresentError(name)
        return self._with_dependencies([*self.dependencies, name])

    def remove(self, name: str) -> ManifestDocument:
        """删除第一个匹配的依赖，其余顺序不变

        Raises:
            NotListedError: 不存在（文档不变）
        """
        deps = self.dependencies
        try:
            deps.remove(name)
        except ValueError:
            raise NotListedError(name) from None
        return self._with_dependencies(deps)

    def _with_dependencies(self, deps: list[str]) -> ManifestDocument:
        data = copy.deepcopy(self.data)
        data[DEPENDENCIES_KEY] = deps
        return ManifestDocument(data=data)

    # ------------------------------------------------------------------
    # 序列化
    # ------------------------------------------------------------------

    def serialize(self) -> str:
        """序列化为 JSON 文本（保持键顺序，2 空格缩进，末尾换行）"""
        return json.dumps(self.data, indent=JSON_INDENT, ensure_ascii=False) + "\n"


class ManifestStore:
    """绑定到单个清单文件的加载/持久化入口"""

    def __init__(self, path: str = "") -> None:
        if not path:
            from uvm.core.config import get_config
            path = get_config().manifest_file
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> ManifestDocument:
        """读取并解析清单

        Raises:
            ManifestMissingError: 文件不存在
            MalformedManifestError: 内容非法
            FilesystemError: 文件存在但无法读取
        """
        if not self.exists():
            raise ManifestMissingError(
                f"未找到 '{self.path}'，请先执行 'uvm init'"
            )
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedManifestError(
                f"'{self.path}' 不是合法的 UTF-8 文本: {e}"
            ) from e
        except OSError as e:
            raise FilesystemError(f"无法读取 '{self.path}': {e}") from e
        return ManifestDocument.parse(text, source=str(self.path))

    def save(self, doc: ManifestDocument) -> None:
        """序列化并原子写回"""
        self.persist(doc.serialize())

    def persist(self, text: str) -> None:
        """原子写入文本：崩溃时要么是旧清单，要么是完整的新清单"""
        try:
            atomic_write(self.path, text)
        except OSError as e:
            raise FilesystemError(f"无法更新 '{self.path}': {e}") from e
        logger.info("清单已写入: %s", self.path)

    def create(self, project_name: str) -> bool:
        """不存在时写入默认清单，返回是否新建"""
        if self.path.exists():
            return False
        self.save(ManifestDocument.default(project_name))
        return True
