"""Precondition checks for required publisher settings."""
from __future__ import annotations

from .settings import PublishSettings


def require(value: str | None, name: str) -> str:
    """Return ``value`` or terminate the process with status 1 when it is missing."""

    if value is None or value == "":
        print(f"{name} cannot be null or empty!")
        raise SystemExit(1)
    return value


def validate_settings(settings: PublishSettings) -> None:
    require(settings.group_id, "groupId")
    require(settings.version, "version")
    require(settings.remote, "remote")
    require(settings.branch, "branch")
