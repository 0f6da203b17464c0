"""Administrative scripts run on the world's script thread pool."""

from .metadata_export import MetadataExportRunner
from .metadata_import import MetadataImportRunner
from .runner import ScriptExecutor, ScriptRegistry, ScriptResult, ScriptRunner

DEFAULT_RUNNERS: tuple[type[ScriptRunner], ...] = (MetadataExportRunner, MetadataImportRunner)

__all__ = [
    "DEFAULT_RUNNERS",
    "MetadataExportRunner",
    "MetadataImportRunner",
    "ScriptExecutor",
    "ScriptRegistry",
    "ScriptResult",
    "ScriptRunner",
]
