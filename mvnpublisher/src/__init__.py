"""
mvn-publisher - install jars into a folder-based Maven repository and push it
"""

from .context import Console, Context, DryRunCommandRunner
from .discovery import derive_artifact_name, discover_archives
from .git_publisher import GitPublisher
from .maven import MavenPublisher
from .settings import PublishSettings, resolve_settings
