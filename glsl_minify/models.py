"""
Data models for the GLSL minifier.

This module contains the dataclass definitions shared by the minifier passes:
source buffers, per-identifier records, the program output and the run
configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class GlslFile:
    """A GLSL source buffer.

    Attributes:
        contents: Unparsed file contents
        path: Full path of the file, used to resolve further @include directives
    """

    contents: str
    path: str | None = None


@dataclass
class GlslUniform:
    """Minified details of one original identifier.

    Although named after uniforms, a record exists for every identifier the
    symbol table has seen. The type is only set for uniform declarations.

    Attributes:
        min_name: Minified identifier name
        type: Declared GLSL type, e.g. 'vec3' or 'float'
    """

    min_name: str
    type: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"type": self.type, "minifiedName": self.min_name}


@dataclass
class GlslProgram:
    """Output of the GLSL minifier.

    Attributes:
        code: Minified GLSL code
        uniforms: Maps original uniform names to their minified details
    """

    code: str
    uniforms: dict[str, GlslUniform] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert the program to plain JSON-serializable data."""
        return {
            "code": self.code,
            "uniforms": {
                name: uniform.to_dict() for name, uniform in self.uniforms.items()
            },
        }


@dataclass
class MinifierConfig:
    """Options for a minifier run.

    Attributes:
        nomangle: Extra identifiers that must never be renamed
        include_paths: Directories searched for @include files not found
            relative to the including file
        default_directory: Base directory for @include directives found in
            buffers that have no path of their own
        strict: Raise on malformed directives instead of logging a warning
    """

    nomangle: list[str] = field(default_factory=list)
    include_paths: list[Path] = field(default_factory=list)
    default_directory: str | None = None
    strict: bool = False
