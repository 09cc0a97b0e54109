"""
SassWatch Compiler Package.

Path classification and adapters around the external style and script compilers.
Requires Python 3.11+.
"""

from compiler.base import BuildToolError, CompileError, CompileResult, Compiler
from compiler.paths import SourceKind, classify, derive_output_path, source_roots
from compiler.style import StyleCompiler
from compiler.script import ScriptCompiler

__all__ = [
    "BuildToolError",
    "CompileError",
    "CompileResult",
    "Compiler",
    "SourceKind",
    "classify",
    "derive_output_path",
    "source_roots",
    "StyleCompiler",
    "ScriptCompiler",
]
