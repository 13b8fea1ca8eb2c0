"""ServiceContainer 单元测试"""

from __future__ import annotations

from pathlib import Path

import pytest

import uvm.core.config as cfgmod
from tests.helpers.fakes import FakeExecutor
from uvm.services.container import (
    ServiceContainer,
    get_container,
    reset_container,
)


class TestServiceContainer:
    def test_lazy_loading(self) -> None:
        c = ServiceContainer()
        assert len(c._instances) == 0
        _ = c.manifest
        assert "manifest" in c._instances

    def test_shared_instances(self) -> None:
        c = ServiceContainer()
        assert c.installer is c.installer
        assert c.installer.store is c.manifest
        assert c.installer.fetcher is c.fetcher

    def test_config_injected(self, tmp_path: Path) -> None:
        cfg = cfgmod.Config(
            manifest_file=str(tmp_path / "pkg.json"),
            modules_dir=str(tmp_path / "vendor"),
            fetch_retries=3,
        )
        c = ServiceContainer(config=cfg)
        assert c.manifest.path == tmp_path / "pkg.json"
        assert c.fetcher.modules_dir == tmp_path / "vendor"
        assert c.fetcher.retries == 3

    def test_executor_injected(self) -> None:
        fake = FakeExecutor()
        c = ServiceContainer(executor=fake)
        assert c.fetcher.executor is fake

    def test_uses_global_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cfgmod, "_current", cfgmod.Config(modules_dir="mods"))
        assert ServiceContainer().config.modules_dir == "mods"


class TestGetContainer:
    def test_singleton(self) -> None:
        assert get_container() is get_container()

    def test_reset(self) -> None:
        c1 = get_container()
        reset_container()
        assert get_container() is not c1
