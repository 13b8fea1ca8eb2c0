"""CLI 端到端测试：CliRunner + 假执行器，在临时工作目录中运行"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.helpers.fakes import FakeExecutor
from uvm.cli import main


def _manifest(workdir: Path) -> dict:
    return json.loads((workdir / "uvmpackage.json").read_text(encoding="utf-8"))


def _write_manifest(workdir: Path, deps: list[str]) -> None:
    (workdir / "uvmpackage.json").write_text(
        json.dumps({"name": "p", "dependencies": deps}), encoding="utf-8",
    )


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


class TestInit:
    def test_init_then_skip(self, runner: CliRunner, workdir: Path) -> None:
        r = runner.invoke(main, ["init"])
        assert r.exit_code == 0
        assert "已初始化项目" in r.output
        assert _manifest(workdir) == {"name": "my-unnarize-project", "dependencies": []}
        assert (workdir / ".gitattributes").is_file()

        r = runner.invoke(main, ["init"])
        assert r.exit_code == 0
        assert r.output.count("已存在，跳过") == 2

    def test_init_with_name(self, runner: CliRunner, workdir: Path) -> None:
        runner.invoke(main, ["init", "--name", "demo"])
        assert _manifest(workdir)["name"] == "demo"


class TestGet:
    def test_get_adds_dependency(self, runner: CliRunner, workdir: Path, fake_executor: FakeExecutor) -> None:
        _write_manifest(workdir, [])
        r = runner.invoke(main, ["get", "foo"])
        assert r.exit_code == 0, r.output
        assert "已将 'foo' 加入依赖" in r.output
        assert _manifest(workdir)["dependencies"] == ["foo"]
        assert (workdir / "umods" / "foo").is_dir()
        assert fake_executor.cloned == ["foo"]

    def test_get_already_dependency(self, runner: CliRunner, workdir: Path, fake_executor: FakeExecutor) -> None:
        _write_manifest(workdir, ["foo"])
        (workdir / "umods" / "foo").mkdir(parents=True)
        r = runner.invoke(main, ["get", "foo"])
        assert r.exit_code == 0
        assert "已存在于本地" in r.output
        assert "已是依赖项" in r.output
        assert fake_executor.calls == []

    def test_get_without_manifest(self, runner: CliRunner, workdir: Path, fake_executor: FakeExecutor) -> None:
        r = runner.invoke(main, ["get", "foo"])
        assert r.exit_code == 1
        assert "uvm init" in r.output

    def test_get_fetch_failed(self, runner: CliRunner, workdir: Path, fake_executor: FakeExecutor) -> None:
        fake_executor.fail_names = {"foo"}
        _write_manifest(workdir, [])
        r = runner.invoke(main, ["get", "foo"])
        assert r.exit_code == 1
        assert _manifest(workdir)["dependencies"] == []

    def test_get_invalid_name(self, runner: CliRunner, workdir: Path, fake_executor: FakeExecutor) -> None:
        _write_manifest(workdir, [])
        r = runner.invoke(main, ["get", "a/b"])
        assert r.exit_code == 1
        assert "非法字符" in r.output

    @pytest.mark.parametrize("args", [["get"], ["get", "a", "b"], ["uninstall"]])
    def test_wrong_arg_count(self, runner: CliRunner, workdir: Path, args: list[str]) -> None:
        r = runner.invoke(main, args)
        assert r.exit_code == 1


class TestInstall:
    def test_install_partial_failure(self, runner: CliRunner, workdir: Path, fake_executor: FakeExecutor) -> None:
        _write_manifest(workdir, ["foo", "bar"])
        (workdir / "umods" / "foo").mkdir(parents=True)
        fake_executor.fail_names = {"bar"}
        r = runner.invoke(main, ["install"])
        assert r.exit_code == 1
        assert "共 2 个, 成功 1 个, 失败 1 个" in r.output
        assert _manifest(workdir)["dependencies"] == ["foo", "bar"]

    def test_install_all_ok(self, runner: CliRunner, workdir: Path, fake_executor: FakeExecutor) -> None:
        _write_manifest(workdir, ["a", "b"])
        r = runner.invoke(main, ["install"])
        assert r.exit_code == 0
        assert "成功 2 个" in r.output
        assert fake_executor.cloned == ["a", "b"]

    def test_install_without_manifest(self, runner: CliRunner, workdir: Path) -> None:
        r = runner.invoke(main, ["install"])
        assert r.exit_code == 1


    def test_install_non_utf8_manifest(self, runner: CliRunner, workdir: Path) -> None:
        (workdir / "uvmpackage.json").write_bytes(b'{"name": "\xff", "dependencies": []}')
        r = runner.invoke(main, ["install"])
        assert r.exit_code == 1
        assert "Error:" in r.output and "UTF-8" in r.output


class TestUninstall:
    def test_uninstall(self, runner: CliRunner, workdir: Path) -> None:
        _write_manifest(workdir, ["foo", "bar"])
        (workdir / "umods" / "foo").mkdir(parents=True)
        r = runner.invoke(main, ["uninstall", "foo"])
        assert r.exit_code == 0
        assert not (workdir / "umods" / "foo").exists()
        assert _manifest(workdir)["dependencies"] == ["bar"]

    def test_uninstall_not_listed(self, runner: CliRunner, workdir: Path) -> None:
        _write_manifest(workdir, ["foo"])
        r = runner.invoke(main, ["uninstall", "missing"])
        assert r.exit_code == 0
        assert "无需处理" in r.output
        assert _manifest(workdir)["dependencies"] == ["foo"]

    def test_uninstall_without_manifest(self, runner: CliRunner, workdir: Path) -> None:
        r = runner.invoke(main, ["uninstall", "foo"])
        assert r.exit_code == 1


class TestMisc:
    @pytest.mark.parametrize("flag", ["-v", "--version"])
    def test_version(self, runner: CliRunner, flag: str) -> None:
        r = runner.invoke(main, [flag])
        assert r.exit_code == 0
        assert r.output.strip() == "uvm version 0.1.0"

    def test_unknown_command(self, runner: CliRunner, workdir: Path) -> None:
        r = runner.invoke(main, ["frobnicate"])
        assert r.exit_code == 1

    def test_no_args(self, runner: CliRunner, workdir: Path) -> None:
        r = runner.invoke(main, [])
        assert r.exit_code == 1
        assert "Usage" in r.output

    def test_list(self, runner: CliRunner, workdir: Path) -> None:
        _write_manifest(workdir, ["a", "b"])
        (workdir / "umods" / "a").mkdir(parents=True)
        r = runner.invoke(main, ["list"])
        assert r.exit_code == 0
        lines = r.output.splitlines()
        assert "a" in lines[0] and "已安装" in lines[0]
        assert "b" in lines[1] and "未安装" in lines[1]

    @pytest.mark.parametrize("text", [
        "modules_dir: [unclosed\n",
        'fetch_retries: "2"\n',
    ])
    def test_bad_config_file(self, runner: CliRunner, workdir: Path, text: str) -> None:
        (workdir / "uvm.yml").write_text(text, encoding="utf-8")
        _write_manifest(workdir, [])
        r = runner.invoke(main, ["list"])
        assert r.exit_code == 1
        assert "Error: 无法加载配置" in r.output
        assert not isinstance(r.exception, (ValueError, TypeError))

    def test_config_file(self, runner: CliRunner, workdir: Path, fake_executor: FakeExecutor) -> None:
        (workdir / "uvm.yml").write_text("modules_dir: vendor\n", encoding="utf-8")
        _write_manifest(workdir, [])
        r = runner.invoke(main, ["get", "foo"])
        assert r.exit_code == 0, r.output
        assert (workdir / "vendor" / "foo").is_dir()
