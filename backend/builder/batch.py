"""
SassWatch Batch Builder.

Compiles every source file in the watched roots once.
Requires Python 3.11+.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from builder.persist import CompilePersister
from compiler.base import BuildToolError, CompileError
from compiler.paths import source_suffix
from utils.config import FailurePolicy
from utils.logger import LoggerMixin


class SourceDiscoveryError(BuildToolError):
    """A source root could not be enumerated."""

    def __init__(self, root: Path, cause: Exception | str) -> None:
        self.root = root
        self.cause = cause
        super().__init__(f"cannot list sources in {root}: {cause}")


@dataclass
class BuildReport:
    """Outcome of a batch build."""

    compiled: list[tuple[Path, Path]] = field(default_factory=list)
    failures: list[CompileError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check if every source compiled."""
        return not self.failures


class BatchBuilder(LoggerMixin):
    """
    Enumerates the source roots and compiles each source file.

    Only the top level of each root is searched. Missing roots are
    skipped; a root that cannot be listed raises SourceDiscoveryError.
    """

    def __init__(
        self,
        roots: list[Path],
        persister: CompilePersister,
        policy: FailurePolicy = FailurePolicy.FAIL_FAST,
    ) -> None:
        self._roots = roots
        self._persister = persister
        self._policy = policy

    def discover(self) -> Iterator[Path]:
        """
        Yield source files from every existing root.

        Yields:
            Source paths, sorted per root
        """
        patterns = [f"*{source_suffix(kind)}" for kind in self._persister.kinds]

        for root in self._roots:
            if not root.exists():
                self.log.info("directory_not_found", path=str(root))
                continue
            if not root.is_dir():
                raise SourceDiscoveryError(root, "not a directory")

            try:
                matches = {
                    path
                    for pattern in patterns
                    for path in root.glob(pattern)
                    if path.is_file()
                }
            except OSError as e:
                raise SourceDiscoveryError(root, e) from e

            yield from sorted(matches)

    def build_all(self) -> BuildReport:
        """
        Compile every discovered source file.

        Returns:
            BuildReport listing compiled files and, under the continue
            policy, the failures

        Raises:
            CompileError: On the first failure under the fail-fast policy
            SourceDiscoveryError: If a root cannot be listed
        """
        report = BuildReport()

        for source in self.discover():
            try:
                output = self._persister.compile_and_write(source)
            except CompileError as e:
                if self._policy is FailurePolicy.FAIL_FAST:
                    raise
                self.log.error("compile_failed", path=str(source), error=str(e))
                report.failures.append(e)
                continue

            if output is not None:
                report.compiled.append((source, output))

        self.log.info(
            "build_completed",
            compiled=len(report.compiled),
            failed=len(report.failures),
        )
        return report
