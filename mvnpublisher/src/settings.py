"""Resolution of publisher settings from options, defines, environment and files."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from core.config_loader import load_config_file, normalize_string_list, select_section


DEFAULT_COMMIT_MESSAGE = "update maven repo"
ENV_PREFIX = "MVN_PUBLISHER_"
CONFIG_SECTION = "publisher"

# Setting key -> environment variable suffix.
ENV_NAMES: Dict[str, str] = {
    "groupId": "GROUP_ID",
    "version": "VERSION",
    "remote": "REMOTE",
    "branch": "BRANCH",
    "selfIgnore": "SELF_IGNORE",
    "commitMessage": "COMMIT_MESSAGE",
    "exclude": "EXCLUDE",
}


@dataclass(frozen=True)
class PublishSettings:
    group_id: str | None
    version: str | None
    remote: str | None
    branch: str | None
    self_ignore: bool = False
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    exclude: tuple[str, ...] = field(default_factory=tuple)


def parse_defines(values: Iterable[str]) -> Dict[str, str]:
    """Parse ``key=value`` strings given with ``-D`` into a mapping."""

    defines: Dict[str, str] = {}
    for raw in values:
        if raw is None:
            continue
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not key or not sep:
            raise ValueError(f"Invalid define '{raw}'; expected key=value")
        defines[key] = value
    return defines


def parse_flag(value: Any) -> bool:
    """Interpret ``value`` the way Java's ``Boolean.getBoolean`` does: only ``true`` is true."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"


def environment_values(environ: Mapping[str, str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for key, suffix in ENV_NAMES.items():
        name = f"{ENV_PREFIX}{suffix}"
        if name in environ:
            values[key] = environ[name]
    return values


def resolve_settings(
    *,
    options: Mapping[str, Any] | None = None,
    defines: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_path: Path | None = None,
) -> PublishSettings:
    """Merge every configuration source into :class:`PublishSettings`.

    Precedence, highest first: explicit options, ``-D`` defines, environment
    variables, the configuration file. ``None`` option values count as unset.
    Missing required values are left as ``None`` for the validator to reject.
    """

    merged: Dict[str, Any] = {}
    if config_path is not None:
        merged.update(select_section(load_config_file(config_path), CONFIG_SECTION))
    merged.update(environment_values(environ or {}))
    merged.update(defines or {})
    merged.update({key: value for key, value in (options or {}).items() if value is not None})

    exclude: List[str] = []
    raw_exclude = merged.get("exclude")
    if isinstance(raw_exclude, str):
        exclude = [part.strip() for part in raw_exclude.split(",") if part.strip()]
    else:
        exclude = normalize_string_list(raw_exclude, field_name="exclude")

    commit_message = merged.get("commitMessage")
    return PublishSettings(
        group_id=_as_text(merged.get("groupId")),
        version=_as_text(merged.get("version")),
        remote=_as_text(merged.get("remote")),
        branch=_as_text(merged.get("branch")),
        self_ignore=parse_flag(merged.get("selfIgnore")),
        commit_message=DEFAULT_COMMIT_MESSAGE if commit_message is None else str(commit_message),
        exclude=tuple(exclude),
    )


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
