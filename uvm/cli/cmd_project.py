"""CLI 项目初始化命令"""

from __future__ import annotations

import click

from uvm.cli import UvmCommand, _svc


def register(group: click.Group) -> None:
    group.add_command(init)


@click.command(cls=UvmCommand)
@click.option("--name", "project_name", default="", help="项目名（默认 my-unnarize-project）")
def init(project_name: str) -> None:
    """初始化项目：创建 uvmpackage.json 与 .gitattributes"""
    svc = _svc()
    result = svc.installer.init_project(project_name)
    manifest_file = str(svc.manifest.path)
    for path, created in result.created.items():
        if not created:
            click.echo(f"'{path}' 已存在，跳过。")
        elif path == manifest_file:
            click.echo(f"已初始化项目: '{path}'")
        else:
            click.echo(f"已创建 '{path}'（GitHub 语言识别）")
