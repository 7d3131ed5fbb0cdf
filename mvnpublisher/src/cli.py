"""Command line interface for the mvn-publisher tool."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Iterable, Mapping
import os
import sys

from core.command_runner import SubprocessCommandRunner, shell_prefix_for

from .context import Console, Context, DryRunCommandRunner
from .discovery import discover_archives
from .git_publisher import GitPublisher
from .maven import MavenPublisher
from .settings import PublishSettings, parse_defines, resolve_settings
from .validation import validate_settings


def _parse_arguments(argv: Iterable[str]) -> Namespace:
    parser = ArgumentParser(
        prog="mvn-publisher",
        description="Install the jars of the current folder into it as a Maven repository and push it with git",
    )
    parser.add_argument("--group-id", dest="groupId", help="groupId used for every artifact")
    parser.add_argument("--version", dest="version", help="Version used for every artifact")
    parser.add_argument("--remote", dest="remote", help="Git remote to push to")
    parser.add_argument("--branch", dest="branch", help="Git branch to push to")
    parser.add_argument(
        "--self-ignore",
        dest="selfIgnore",
        action="store_const",
        const=True,
        default=None,
        help=(
            "Do not publish or stage the script named by argv[0]; only useful when that script "
            "lives in the published folder (use --exclude otherwise, e.g. with the mvn-publisher console script)"
        ),
    )
    parser.add_argument("--commit-message", dest="commitMessage", help="Commit message (default: 'update maven repo')")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        type=Path,
        help="Path never published or staged (repeatable)",
    )
    parser.add_argument(
        "-D",
        dest="defines",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Set a setting by key, e.g. -DgroupId=com.example",
    )
    parser.add_argument("--config", "-c", type=Path, default=None, help="Configuration file (.toml/.json/.yaml)")
    parser.add_argument("--mvn", default="mvn", help="Maven executable (default: mvn)")
    parser.add_argument("--git", default="git", help="Git executable (default: git)")
    parser.add_argument("--dry-run", "-n", action="store_true", help="Show commands without running them")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output (maps to debug)")
    parser.add_argument(
        "--log",
        "-l",
        choices=["none", "error", "info", "debug"],
        default=None,
        help="Set log level (default: info)",
    )
    return parser.parse_args(list(argv))


def _entry_point_paths() -> set[Path]:
    entry = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if entry is not None and entry.is_file():
        return {entry.resolve()}
    return set()


def _always_excluded(settings: PublishSettings, extra: Iterable[Path], workspace: Path) -> frozenset[Path]:
    paths = set(_entry_point_paths()) if settings.self_ignore else set()
    for raw in [*settings.exclude, *extra]:
        path = Path(raw)
        if not path.is_absolute():
            path = workspace / path
        paths.add(path.resolve())
    return frozenset(paths)


def publish(ctx: Context, settings: PublishSettings, *, mvn: str = "mvn", git: str = "git") -> int:
    """Run discovery, Maven installation and, when every install succeeded, the git push."""
    console = ctx.console
    files = discover_archives(ctx.workspace, exclude=ctx.always_exclude, console=console)

    console.info("Detected the following files:")
    for file, name in sorted(files.items()):
        console.info(f"{file} as {name}")
    console.info("Starting publishing...")

    maven = MavenPublisher(ctx.runner, console, executable=mvn)
    if not maven.publish(files, ctx.workspace, settings.group_id, settings.version):
        console.error("Maven reported a build failure; skipping git publication")
        return 0

    publisher = GitPublisher(ctx.runner, console, executable=git)
    publisher.publish(
        ctx.workspace,
        settings.remote,
        settings.branch,
        list(files),
        settings.commit_message,
        always_exclude=ctx.always_exclude,
    )
    return 0


def main(argv: Iterable[str] | None = None, *, environ: Mapping[str, str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)
    workspace = Path.cwd()

    if args.log:
        log_level = args.log
    else:
        log_level = "debug" if args.verbose else "info"
    console = Console(level=log_level, dry_run=args.dry_run)

    options = {key: getattr(args, key) for key in ("groupId", "version", "remote", "branch", "selfIgnore", "commitMessage")}
    try:
        settings = resolve_settings(
            options=options,
            defines=parse_defines(args.defines),
            environ=os.environ if environ is None else environ,
            config_path=args.config,
        )
    except (FileNotFoundError, TypeError, ValueError, RuntimeError) as exc:
        console.error(f"Failed to load configuration: {exc}")
        return 1

    validate_settings(settings)

    shell_prefix = shell_prefix_for()
    console.debug(f"Shell prefix: {list(shell_prefix) or 'none'}")
    if args.dry_run:
        runner = DryRunCommandRunner(shell_prefix=shell_prefix)
    else:
        runner = SubprocessCommandRunner(shell_prefix=shell_prefix)

    ctx = Context(
        console=console,
        runner=runner,
        workspace=workspace,
        always_exclude=_always_excluded(settings, args.exclude, workspace),
    )

    try:
        return publish(ctx, settings, mvn=args.mvn, git=args.git)
    except KeyboardInterrupt:
        console.error("Interrupted while waiting for an external command")
        return 130


__all__ = ["main", "publish"]
