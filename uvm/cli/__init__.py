"""uvm 命令行接口

命令按领域拆分为子模块，每个模块注册自己的命令到 main group。
业务异常 (UvmError) 统一在 group 层转换为 click 错误：输出到 stderr，退出码 1。
参数错误、未知命令同样以退出码 1 结束。
"""

from __future__ import annotations

import os
from typing import Any

import click
import yaml

from uvm import __version__
from uvm.core.exceptions import UvmError
from uvm.services.container import get_container, reset_container
from uvm.utils.logger import setup_logging


def _svc() -> Any:
    """获取全局服务容器的快捷方式"""
    return get_container()


class _UsageExitMixin:
    """把 click 的用法错误退出码 (2) 统一为 1"""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)  # type: ignore[misc]
        except click.UsageError as e:
            e.exit_code = 1
            raise


class UvmCommand(_UsageExitMixin, click.Command):
    """子命令"""


class UvmGroup(_UsageExitMixin, click.Group):
    """顶层命令组"""

    command_class = UvmCommand

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if not args:
            click.echo(ctx.get_help(), err=True)
            ctx.exit(1)
        return super().parse_args(ctx, args)

    def resolve_command(
        self, ctx: click.Context, args: list[str],
    ) -> tuple[str | None, click.Command | None, list[str]]:
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except UvmError as e:
            raise click.ClickException(str(e)) from e


@click.group(cls=UvmGroup)
@click.version_option(
    __version__, "-v", "--version",
    prog_name="uvm", message="%(prog)s version %(version)s",
)
@click.option(
    "--config", "config_path", default="uvm.yml", show_default=True,
    help="配置文件路径（不存在则使用默认配置）",
)
def main(config_path: str) -> None:
    """Unnarize Verse Manager - 拉取代码仓并管理 uvmpackage.json 中的依赖"""
    setup_logging(
        level=os.getenv("UVM_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("UVM_LOG_JSON", "") == "1",
    )
    from uvm.core.config import init_config
    try:
        init_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"无法加载配置 '{config_path}': {e}") from e
    reset_container()


# 注册各领域子命令
from uvm.cli.cmd_project import register as _reg_project  # noqa: E402
from uvm.cli.cmd_deps import register as _reg_deps  # noqa: E402

_reg_project(main)
_reg_deps(main)
