"""共享 fixture：假命令执行器 + 独立配置"""

from __future__ import annotations

from pathlib import Path

import pytest

import uvm.core.config as cfgmod
import uvm.utils.shell as shellmod
from tests.helpers.fakes import FakeExecutor
from uvm.services.container import reset_container
from uvm.utils.logger import reset_logging


@pytest.fixture()
def fake_executor(monkeypatch: pytest.MonkeyPatch) -> FakeExecutor:
    """替换全局默认执行器，CLI 与容器构造的拉取器都会用到它"""
    fake = FakeExecutor()
    monkeypatch.setattr(shellmod, "_default_executor", fake)
    return fake


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    """每个测试使用默认配置与全新容器"""
    monkeypatch.setattr(cfgmod, "_current", None)
    reset_container()
    yield
    reset_container()
    reset_logging()


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """切换到临时工作目录（清单与 umods/ 都按相对路径解析）"""
    monkeypatch.chdir(tmp_path)
    return tmp_path
