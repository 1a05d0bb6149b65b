"""Bootstrap a development environment from a dotfiles repository."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from dotstrap.protocols import (
    CommandRunner,
    FileSystem,
    SourceRepository,
)

__all__ = [
    "__version__",
    "CommandRunner",
    "FileSystem",
    "SourceRepository",
]
