"""Service layer for the clean pipeline and its external tools."""

from c2rust_clean.services.config_store import C2RustConfigStore, ConfigStore, InMemoryConfigStore
from c2rust_clean.services.executor import execute
from c2rust_clean.services.git import GitService
from c2rust_clean.services.project_root import relative_dir, resolve_root
from c2rust_clean.services.reconciler import persist, reconcile

__all__ = [
    "C2RustConfigStore",
    "ConfigStore",
    "GitService",
    "InMemoryConfigStore",
    "execute",
    "persist",
    "reconcile",
    "relative_dir",
    "resolve_root",
]
