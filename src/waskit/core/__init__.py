"""Core modules for waskit.

This package contains the scaffolding engine used by the commands:
- registry: Template catalog
- copier: Template materialization
- mutator: Manifest and config file edits
- installer: Package manager detection and install fallback
- scaffold: The coordinator that sequences all of the above
"""

from waskit.core.config import WaskitConfig, load_config
from waskit.core.errors import (
    WaskitError,
    RegistryError,
    TemplateNotFoundError,
    InvalidDestinationError,
    CopyError,
    ManifestError,
)
from waskit.core.filesystem import FileSystem, LocalFileSystem, get_file_system
from waskit.core.registry import TemplateDescriptor, TemplateRegistry
from waskit.core.copier import FileTreeCopier
from waskit.core.mutator import ConfigMutator, MutationReport, rewrite
from waskit.core.installer import InstallationOrchestrator, InstallAttempt, InstallResult
from waskit.core.scaffold import (
    ScaffoldCoordinator,
    ScaffoldRequest,
    ScaffoldResult,
    ScaffoldState,
)

__all__ = [
    # Config
    "WaskitConfig",
    "load_config",
    # Errors
    "WaskitError",
    "RegistryError",
    "TemplateNotFoundError",
    "InvalidDestinationError",
    "CopyError",
    "ManifestError",
    # File system
    "FileSystem",
    "LocalFileSystem",
    "get_file_system",
    # Engine
    "TemplateDescriptor",
    "TemplateRegistry",
    "FileTreeCopier",
    "ConfigMutator",
    "MutationReport",
    "rewrite",
    "InstallationOrchestrator",
    "InstallAttempt",
    "InstallResult",
    "ScaffoldCoordinator",
    "ScaffoldRequest",
    "ScaffoldResult",
    "ScaffoldState",
]
