"""Installation of discovered archives into a local Maven repository."""
from __future__ import annotations

from pathlib import Path
from typing import List, Mapping

from core.command_runner import CommandError, CommandRunner

from .context import Console


FAILURE_MARKER = "BUILD FAILURE"
PACKAGING = "jar"


def install_file_command(
    *,
    executable: str,
    group_id: str,
    artifact_id: str,
    version: str,
    file: Path,
    repository: Path,
) -> List[str]:
    return [
        executable,
        "install:install-file",
        f"-DgroupId={group_id}",
        f"-DartifactId={artifact_id}",
        f"-Dversion={version}",
        f"-Dfile={file.resolve()}",
        f"-Dpackaging={PACKAGING}",
        f"-DlocalRepositoryPath={repository.resolve()}",
        "-DcreateChecksum=true",
        "-DgeneratePom=true",
    ]


class MavenPublisher:
    def __init__(self, runner: CommandRunner, console: Console, *, executable: str = "mvn") -> None:
        self._runner = runner
        self._console = console
        self._executable = executable

    def publish(
        self,
        files: Mapping[Path, str],
        repository: Path,
        group_id: str,
        version: str,
    ) -> bool:
        """Install every file into ``repository``.

        Returns ``False`` as soon as any install printed the Maven failure
        marker; later successful installs do not reset it. Errors raised for a
        single file are reported and the remaining files are still processed.
        """
        if not files:
            raise ValueError("No files to publish (does the current folder contain any valid file?)")
        if not repository.is_dir():
            raise ValueError(f"Repository {repository} is not a directory")

        success = True

        def watch(line: str) -> None:
            nonlocal success
            if FAILURE_MARKER in line:
                success = False

        for file, artifact_id in sorted(files.items()):
            command = install_file_command(
                executable=self._executable,
                group_id=group_id,
                artifact_id=artifact_id,
                version=version,
                file=file,
                repository=repository,
            )
            self._console.info(f"Starting Maven publishing for {file}")
            try:
                result = self._runner.run(
                    command,
                    cwd=repository,
                    check=False,
                    note=f"install {artifact_id}",
                    stream=True,
                    on_line=watch,
                )
            except (CommandError, OSError) as exc:
                self._console.error(f"Error while handling {file}: {exc}")
                continue

            if result.returncode != 0:
                detail = f": {result.stderr}" if result.stderr else ""
                self._console.error(
                    f"{self._executable} exited with code {result.returncode} for {file}{detail}"
                )
            self._console.info(f"Ended Maven publication for {file}")

        self._console.info("Done")
        return success
