from glsl_minify.core import GlslMinify, minify, minify_file
from glsl_minify.errors import DirectiveSyntaxError, InclusionError, MinifierError
from glsl_minify.models import GlslFile, GlslProgram, GlslUniform, MinifierConfig
from glsl_minify.resolver import FileResolver, FileSystemResolver, MemoryResolver
from glsl_minify.symbols import TokenMap

__version__ = "0.1.0"


__all__ = [
    "GlslMinify",
    "minify",
    "minify_file",
    "DirectiveSyntaxError",
    "InclusionError",
    "MinifierError",
    "GlslFile",
    "GlslProgram",
    "GlslUniform",
    "MinifierConfig",
    "FileResolver",
    "FileSystemResolver",
    "MemoryResolver",
    "TokenMap",
]
