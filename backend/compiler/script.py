"""
SassWatch Script Compiler.

Compiles ES6 (.js6) files by running an external command-line compiler.
Requires Python 3.11+.
"""

import shlex
import subprocess
from pathlib import Path

from compiler.paths import SourceKind, derive_output_path
from compiler.base import CompileResult
from utils.config import get_settings
from utils.logger import LoggerMixin


class ScriptCompiler(LoggerMixin):
    """
    Runs the external script compiler to completion for each file.

    The tool is invoked as ``<command> --script <input> --out <output>``
    and writes the output file itself. There is no timeout.
    """

    def __init__(
        self,
        command: str | None = None,
        install_hint: str | None = None,
    ) -> None:
        """
        Initialize the script compiler.

        Args:
            command: Compiler executable, defaults to the configured one
            install_hint: Message shown when the compiler fails
        """
        settings = get_settings()
        self._command = command or settings.script.compiler_command
        self._hint = install_hint or settings.script.install_hint

    @property
    def hint(self) -> str:
        return f"ensure {self._command} is installed and on PATH ({self._hint})"

    def command_for(self, source: Path) -> list[str]:
        """Build the argument list for compiling a source file."""
        output = derive_output_path(source, SourceKind.SCRIPT)
        return [*shlex.split(self._command), "--script", str(source), "--out", str(output)]

    def compile(self, source: Path) -> CompileResult:
        """
        Compile a single .js6 file.

        Args:
            source: Path to the .js6 file

        Returns:
            CompileResult with no output text on success, since the tool
            wrote the output file; the captured error output on failure
        """
        args = self.command_for(source)
        self.log.debug("running_script_compiler", args=args)

        try:
            proc = subprocess.run(args, capture_output=True, text=True, check=False)
        except OSError as e:
            return CompileResult.failure(source, str(e), hint=self.hint)

        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout).strip()
            diagnostic = f"exit status {proc.returncode}"
            if detail:
                diagnostic = f"{diagnostic}: {detail}"
            return CompileResult.failure(source, diagnostic, hint=self.hint)

        return CompileResult.success(source)
