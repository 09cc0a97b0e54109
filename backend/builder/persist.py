"""
SassWatch Compile-and-Write.

The single per-file operation shared by the batch build and the watcher.
Requires Python 3.11+.
"""

from pathlib import Path

from compiler.base import Compiler
from compiler.paths import SourceKind, classify, derive_output_path
from compiler.script import ScriptCompiler
from compiler.style import StyleCompiler
from utils.logger import LoggerMixin


class CompilePersister(LoggerMixin):
    """
    Compiles one source file and writes its output file.

    Output files are overwritten in full. A failed compile raises
    CompileError and leaves any existing output untouched.
    """

    def __init__(
        self,
        style_compiler: Compiler | None = None,
        script_compiler: Compiler | None = None,
        scripts_enabled: bool = True,
    ) -> None:
        """
        Initialize the persister.

        Args:
            style_compiler: Adapter for .scss files
            script_compiler: Adapter for .js6 files
            scripts_enabled: Whether .js6 files are compiled at all
        """
        self._compilers: dict[SourceKind, Compiler] = {
            SourceKind.STYLE: style_compiler or StyleCompiler(),
        }
        if scripts_enabled:
            self._compilers[SourceKind.SCRIPT] = script_compiler or ScriptCompiler()

    @property
    def kinds(self) -> list[SourceKind]:
        """Source kinds this persister compiles."""
        return list(self._compilers)

    def handles(self, path: str | Path) -> bool:
        """Check if a path is a source file this persister compiles."""
        return classify(path) in self._compilers

    def compile_and_write(self, path: str | Path) -> Path | None:
        """
        Compile a source file and write the result next to it.

        Args:
            path: Source file path

        Returns:
            The output path, or None if the path is not a compilable source

        Raises:
            CompileError: If the compiler reports a failure
        """
        kind = classify(path)
        compiler = self._compilers.get(kind)
        if compiler is None:
            return None

        source = Path(path)
        output_path = derive_output_path(source, kind)

        result = compiler.compile(source)
        if not result.ok:
            raise result.to_error()

        if result.output is not None:
            output_path.write_text(result.output, encoding="utf-8")

        self.log.info("compiled", source=str(source), output=str(output_path))
        return output_path
