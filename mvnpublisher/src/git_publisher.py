"""Staging, committing and pushing the Maven repository folder.

Reads go through pygit2; writes go through the git CLI so hooks and user
configuration are respected.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import pygit2

from core.command_runner import LAUNCH_FAILURE_RETURNCODE, CommandError, CommandResult, CommandRunner

from .context import Console


GIT_DIR = ".git"


def describe_head(repository: Path) -> Optional[str]:
    """Return ``<branch>@<short sha>`` for HEAD, or ``None`` when it cannot be read."""
    try:
        repo = pygit2.Repository(str(repository))
        if repo.head_is_unborn:
            return None
        branch = None if repo.head_is_detached else repo.head.shorthand
        short = str(repo.head.target)[:7]
    except (pygit2.GitError, KeyError):
        return None
    return f"{branch}@{short}" if branch else short


class GitPublisher:
    def __init__(self, runner: CommandRunner, console: Console, *, executable: str = "git") -> None:
        self._runner = runner
        self._console = console
        self._executable = executable

    def staging_candidates(
        self,
        repository: Path,
        ignored_files: Iterable[Path],
        always_exclude: Iterable[Path] = (),
    ) -> List[Path]:
        """Children of ``repository`` that should be staged, sorted by name."""
        excluded = {Path(path).resolve() for path in (*ignored_files, *always_exclude)}
        return [
            child for child in sorted(repository.iterdir())
            if child.name != GIT_DIR and child.resolve() not in excluded
        ]

    def publish(
        self,
        repository: Path,
        remote: str,
        branch: str,
        ignored_files: Iterable[Path],
        commit_message: str,
        *,
        always_exclude: Iterable[Path] = (),
    ) -> bool:
        """Stage every eligible child of ``repository``, commit once and push once.

        Raises ``ValueError`` when ``repository`` is not a git working tree.
        ``git add`` and ``git commit`` exit codes are only reported: an ignored
        child or "nothing to commit" does not stop the push. A git executable
        that cannot be started, or a failed push, stops the sequence, is
        reported, and makes this return ``False``; files staged before that
        stay staged.
        """
        if not repository.is_dir():
            raise ValueError(f"{repository} is not a directory")
        if not (repository / GIT_DIR).exists():
            raise ValueError(f"{repository} is not a git repository")

        try:
            for child in self.staging_candidates(repository, ignored_files, always_exclude):
                result = self._git(["add", child.name], repository, check=False)
                if result.returncode != 0:
                    self._console.error(f"git add {child.name} exited with code {result.returncode}")
            result = self._git(["commit", "-m", commit_message], repository, check=False)
            if result.returncode != 0:
                self._console.info("Commit step reported no new changes")
            self._git(["push", remote, branch], repository)
        except (CommandError, OSError) as exc:
            self._console.error(f"Error while pushing to {branch}: {exc}")
            return False

        if self._console.dry_run:
            self._console.dry(f"Would push to {remote}/{branch}")
            return True

        head = describe_head(repository)
        suffix = f" ({head})" if head else ""
        self._console.info(f"Pushed to {remote}/{branch}{suffix}")
        return True

    def _git(self, args: List[str], repository: Path, *, check: bool = True) -> CommandResult:
        result = self._runner.run(
            [self._executable, *args],
            cwd=repository,
            check=check,
            stream=True,
        )
        if result.returncode == LAUNCH_FAILURE_RETURNCODE:
            raise CommandError(result)
        return result
