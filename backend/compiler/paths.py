"""
SassWatch Path Classifier.

Maps source paths to their kind and derived output path.
Requires Python 3.11+.
"""

from enum import Enum
from pathlib import Path

STYLES_DIR = "styles"
SCRIPTS_DIR = "scripts"

STYLE_SUFFIX = ".scss"
STYLE_OUTPUT_SUFFIX = ".css"
SCRIPT_SUFFIX = ".js6"
SCRIPT_OUTPUT_SUFFIX = ".js"


class SourceKind(str, Enum):
    """Kind of a path as far as the build is concerned."""

    STYLE = "style"
    SCRIPT = "script"
    UNRELATED = "unrelated"


_SUFFIXES: dict[SourceKind, tuple[str, str]] = {
    SourceKind.STYLE: (STYLE_SUFFIX, STYLE_OUTPUT_SUFFIX),
    SourceKind.SCRIPT: (SCRIPT_SUFFIX, SCRIPT_OUTPUT_SUFFIX),
}


def classify(path: str | Path) -> SourceKind:
    """Classify a path by its trailing suffix."""
    name = str(path)
    for kind, (suffix, _) in _SUFFIXES.items():
        if name.endswith(suffix):
            return kind
    return SourceKind.UNRELATED


def source_suffix(kind: SourceKind) -> str:
    """Get the source suffix for a compilable kind."""
    return _SUFFIXES[kind][0]


def derive_output_path(path: str | Path, kind: SourceKind | None = None) -> Path:
    """
    Derive the output path for a source file.

    Only the trailing source suffix is replaced, so directory names that
    happen to contain the suffix text are left alone.

    Args:
        path: Source file path
        kind: Source kind, classified from the path when omitted

    Returns:
        Output file path

    Raises:
        ValueError: If the path is not a source file of the given kind
    """
    name = str(path)
    kind = kind or classify(name)
    if kind is SourceKind.UNRELATED:
        raise ValueError(f"not a source file: {name}")

    suffix, output_suffix = _SUFFIXES[kind]
    if not name.endswith(suffix):
        raise ValueError(f"{name} does not end with {suffix}")
    return Path(name[: -len(suffix)] + output_suffix)


def source_roots(root_dir: str | Path = ".") -> list[Path]:
    """Get the styles/ and scripts/ roots under a project directory."""
    base = Path(root_dir)
    return [base / STYLES_DIR, base / SCRIPTS_DIR]
