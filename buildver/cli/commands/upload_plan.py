"""Show how upload tasks are grouped under the lifecycle tasks."""

from __future__ import annotations

from buildver.cli.commands._options import (
    IGNORE_RECEIPT_OPTION,
    MILESTONE_OPTION,
    RELEASE_OPTION,
    SNAPSHOT_OPTION,
)
from buildver.cli.context import build_context
from buildver.cli.errors import exit_on_error
from buildver.output.console import Style
from buildver.plugin import Project, configure_build, configure_projects
from buildver.versioning.build_type import intents_from_flags


def upload_plan(
    snapshot: bool = SNAPSHOT_OPTION,
    release: bool = RELEASE_OPTION,
    milestone: bool = MILESTONE_OPTION,
    ignore_incoming_build_receipt: bool = IGNORE_RECEIPT_OPTION,
) -> None:
    """List, per project, the upload tasks behind uploadMain and uploadJni."""
    ctx = build_context()
    build = exit_on_error(
        configure_build(
            config=ctx.config,
            build_root=ctx.build_root,
            intents=intents_from_flags(snapshot=snapshot, release=release, milestone=milestone),
            ignore_incoming_receipt=ignore_incoming_build_receipt,
            console=ctx.console,
        ),
        ctx.console,
    )
    projects = exit_on_error(
        configure_projects(build, [Project.from_config(p) for p in ctx.config.projects]),
        ctx.console,
    )
    version = exit_on_error(build.version.render(), ctx.console)

    if not projects:
        ctx.console.warning("no projects declared in buildver.toml")
        return

    for project in projects:
        ctx.console.header(f"{project.name} {version}")
        if project.lifecycle is None:
            continue
        for task in (project.lifecycle.main, project.lifecycle.other):
            ctx.console.print(f"{task.name}: {task.description}", Style.BOLD)
            if not task.dependencies:
                ctx.console.print("  (nothing to upload)", Style.DIM)
            for dep in task.dependencies:
                ctx.console.print(f"  {dep}")
