"""
SassWatch Builder Package.

One-shot builds and the shared compile-and-write operation.
Requires Python 3.11+.
"""

from builder.persist import CompilePersister
from builder.batch import BatchBuilder, BuildReport, SourceDiscoveryError

__all__ = [
    "CompilePersister",
    "BatchBuilder",
    "BuildReport",
    "SourceDiscoveryError",
]
