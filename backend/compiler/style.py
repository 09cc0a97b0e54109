"""
SassWatch Style Compiler.

Compiles SCSS files to CSS using libsass.
Requires Python 3.11+.
"""

from pathlib import Path

import sass

from compiler.base import CompileResult
from utils.logger import LoggerMixin

# libsass output style 2
OUTPUT_STYLE = "compact"


class StyleCompiler(LoggerMixin):
    """
    Compiles SCSS sources through the libsass engine.

    The engine reads the file itself and allocates its native compile
    context inside ``sass.compile``, freeing it before the call returns
    on both the success and the error path.
    """

    def compile(self, source: Path) -> CompileResult:
        """
        Compile a single SCSS file.

        Args:
            source: Path to the .scss file

        Returns:
            CompileResult with the CSS text, or the engine's error message
        """
        try:
            css = sass.compile(filename=str(source), output_style=OUTPUT_STYLE)
        except sass.CompileError as e:
            self.log.debug("style_compile_failed", path=str(source))
            return CompileResult.failure(source, str(e))
        except OSError as e:
            return CompileResult.failure(source, str(e))

        return CompileResult.success(source, css)
