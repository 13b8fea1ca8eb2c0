"""CLI 依赖管理命令：get / install / uninstall / list"""

from __future__ import annotations

import click

from uvm.cli import UvmCommand, _svc
from uvm.core.models import FetchStatus

_STATUS_LABELS = {
    FetchStatus.INSTALLED: "已安装",
    FetchStatus.ALREADY_LOCAL: "已存在",
    FetchStatus.FETCH_FAILED: "失败",
}


def register(group: click.Group) -> None:
    group.add_command(get)
    group.add_command(install)
    group.add_command(uninstall)
    group.add_command(list_deps)


@click.command(cls=UvmCommand)
@click.argument("name")
def get(name: str) -> None:
    """拉取代码仓并加入依赖"""
    svc = _svc()
    result = svc.installer.get(name)
    if result.fetch_status is FetchStatus.ALREADY_LOCAL:
        click.echo(f"'{name}' 已存在于本地，跳过下载。")
    else:
        click.echo(f"已安装 '{name}' 到 {svc.config.modules_dir}/")
    if result.added:
        click.echo(f"已将 '{name}' 加入依赖。")
    else:
        click.echo(f"'{name}' 已是依赖项。")


@click.command(cls=UvmCommand)
def install() -> None:
    """按 uvmpackage.json 安装全部依赖"""
    click.echo("正在安装依赖...")
    report = _svc().installer.install_all()
    for name, status in report.results:
        click.echo(f"  [{_STATUS_LABELS[status]}] {name}")
    click.echo(
        f"安装完成: 共 {report.attempted} 个, "
        f"成功 {len(report.succeeded)} 个, 失败 {len(report.failed)} 个"
    )
    if not report.success:
        click.echo(f"拉取失败: {', '.join(report.failed)}", err=True)
        raise SystemExit(1)


@click.command(cls=UvmCommand)
@click.argument("name")
def uninstall(name: str) -> None:
    """删除本地代码仓并从依赖中移除"""
    svc = _svc()
    result = svc.installer.uninstall(name)
    if result.dir_removed:
        click.echo(f"已删除目录 '{svc.fetcher.target_path(name)}'")
    else:
        click.echo(f"本地未找到 '{name}' 的目录，继续检查依赖文件。")
    if result.delisted:
        click.echo(f"已从依赖中移除 '{name}'。")
    else:
        click.echo(f"'{name}' 不在依赖列表中，无需处理。")


@click.command(name="list", cls=UvmCommand)
def list_deps() -> None:
    """列出依赖及本地安装状态"""
    deps = _svc().installer.list_dependencies()
    if not deps:
        click.echo("未定义任何依赖。")
        return
    for name, local in deps:
        mark = "已安装" if local else "未安装"
        click.echo(f"  {name:30s} [{mark}]")
