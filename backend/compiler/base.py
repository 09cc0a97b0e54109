"""
SassWatch Compiler Base Types.

Result and error types shared by the compiler adapters.
Requires Python 3.11+.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class BuildToolError(Exception):
    """Base class for every error the build tool reports to its caller."""


class CompileError(BuildToolError):
    """A source file failed to compile."""

    def __init__(self, source: Path, diagnostic: str, hint: str | None = None) -> None:
        self.source = source
        self.diagnostic = diagnostic
        self.hint = hint
        super().__init__(str(self))

    def __str__(self) -> str:
        message = f"{self.source}: {self.diagnostic}"
        if self.hint:
            message = f"{self.hint}: {message}"
        return message


@dataclass(frozen=True)
class CompileResult:
    """
    Outcome of compiling a single source file.

    ``output`` is None for a successful compile when the external tool
    wrote the output file itself.
    """

    source: Path
    output: str | None = None
    diagnostic: str | None = None
    hint: str | None = None

    @property
    def ok(self) -> bool:
        """Check if the compile succeeded."""
        return self.diagnostic is None

    @classmethod
    def success(cls, source: Path, output: str | None = None) -> "CompileResult":
        return cls(source=source, output=output)

    @classmethod
    def failure(cls, source: Path, diagnostic: str, hint: str | None = None) -> "CompileResult":
        return cls(source=source, diagnostic=diagnostic, hint=hint)

    def to_error(self) -> CompileError:
        """Convert a failed result into the error raised to callers."""
        if self.ok:
            raise ValueError(f"compile of {self.source} succeeded")
        return CompileError(self.source, self.diagnostic or "", hint=self.hint)


class Compiler(Protocol):
    """Adapter around an external compilation engine."""

    def compile(self, source: Path) -> CompileResult:
        ...
