"""
Discovery of archive files to publish and derivation of their artifact names.
"""
import re
from pathlib import Path
from typing import Dict, Iterable, Optional

from .context import Console


ARCHIVE_EXTENSION = ".jar"

# "-1.2.3" / "-10.0" as a whole word; only the first match is removed.
VERSION_PATTERN = re.compile(r"\b(-\d+(?:\.\d+)+)\b")


def derive_artifact_name(file_name: str, extension: str = ARCHIVE_EXTENSION) -> str:
    """
    Strip the first embedded version token and the extension from a file name.

    ``foo-1.2.3.jar`` -> ``foo``; ``archive-2.0.1-beta.jar`` -> ``archive-beta``.
    """
    name = VERSION_PATTERN.sub("", file_name, count=1)
    if extension and name.endswith(extension):
        name = name[: -len(extension)]
    return name


def discover_archives(
    directory: Path,
    *,
    exclude: Iterable[Path] = (),
    extension: str = ARCHIVE_EXTENSION,
    console: Optional[Console] = None,
) -> Dict[Path, str]:
    """
    Find archives directly inside ``directory``.

    Returns a mapping of file path to the artifact id it should be published
    as. Files whose resolved path is in ``exclude`` are skipped. The files on
    disk are never renamed.
    """
    if not directory.is_dir():
        raise ValueError(f"{directory} is not a directory")

    candidates = sorted(
        path for path in directory.iterdir()
        if path.name.endswith(extension) and path.is_file()
    )
    if not candidates:
        if console:
            console.info("The current folder is empty or it doesn't have valid files!")
        return {}

    excluded = {Path(path).resolve() for path in exclude}
    found: Dict[Path, str] = {}
    for path in candidates:
        if path.resolve() in excluded:
            if console:
                console.debug(f"Skipping excluded file: {path}")
            continue
        found[path] = derive_artifact_name(path.name, extension)
    return found
