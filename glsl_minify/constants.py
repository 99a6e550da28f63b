"""
Constants and predefined values for the GLSL minifier.

This module contains the reserved keyword table seeded into every symbol table,
the alphabet used for minified names and the regular expressions that recognize
the minifier's own directives.
"""

import re
import string

# Identifiers with this prefix belong to the GL runtime and are never renamed
BUILTIN_VARIABLE_PREFIX = "gl_"

# Digits of the base-52 minified name numbering, uppercase first
MINIFIED_NAME_ALPHABET = string.ascii_uppercase + string.ascii_lowercase

# GLSL keywords and built-ins that must keep their spelling
GLSL_RESERVED_KEYWORDS: frozenset[str] = frozenset(
    {
        # Basic types
        "bool",
        "double",
        "float",
        "int",
        "uint",
        # Vector types
        "vec2",
        "vec3",
        "vec4",
        "bvec2",
        "bvec3",
        "bvec4",
        "dvec2",
        "dvec3",
        "dvec4",
        "ivec2",
        "ivec3",
        "ivec4",
        "uvec2",
        "uvec3",
        "uvec4",
        # Matrix types
        "mat2",
        "mat2x2",
        "mat2x3",
        "mat2x4",
        "mat3",
        "mat3x2",
        "mat3x3",
        "mat3x4",
        "mat4",
        "mat4x2",
        "mat4x3",
        "mat4x4",
        # Other type-related keywords
        "attribute",
        "const",
        "false",
        "invariant",
        "struct",
        "true",
        "uniform",
        "varying",
        "void",
        # Precision keywords
        "highp",
        "lowp",
        "mediump",
        "precision",
        # Input/output keywords
        "in",
        "inout",
        "out",
        # Control keywords
        "break",
        "continue",
        "do",
        "else",
        "for",
        "if",
        "main",
        "return",
        "while",
        # Built-in macros
        "__FILE__",
        "__LINE__",
        "__VERSION__",
        "GL_ES",
        "GL_FRAGMENT_PRECISION_HIGH",
        # Trigonometric functions
        "acos",
        "acosh",
        "asin",
        "asinh",
        "atan",
        "atanh",
        "cos",
        "cosh",
        "degrees",
        "radians",
        "sin",
        "sinh",
        "tan",
        "tanh",
        # Exponents and logarithms
        "exp",
        "exp2",
        "inversesqrt",
        "log",
        "log2",
        "pow",
        "sqrt",
        # Clamping and modulus-related functions
        "abs",
        "ceil",
        "clamp",
        "floor",
        "fract",
        "max",
        "min",
        "mod",
        "modf",
        "round",
        "roundEven",
        "sign",
        "trunc",
        # Floating point functions
        "isinf",
        "isnan",
        # Boolean functions
        "all",
        "any",
        "equal",
        "greaterThan",
        "greaterThanEqual",
        "lessThan",
        "lessThanEqual",
        "not",
        "notEqual",
        # Vector functions
        "cross",
        "distance",
        "dot",
        "faceforward",
        "length",
        "outerProduct",
        "normalize",
        "reflect",
        "refract",
        # Matrix functions
        "determinant",
        "inverse",
        "matrixCompMult",
        # Interpolation functions
        "mix",
        "step",
        "smoothstep",
        # Texture functions
        "texture2D",
        "texture2DProj",
        "textureCube",
        "textureSize",
        # Noise functions
        "noise1",
        "noise2",
        "noise3",
        "noise4",
        # Derivative functions
        "dFdx",
        "dFdxCoarse",
        "dFdxFine",
        "dFdy",
        "dFdyCoarse",
        "dFdyFine",
        "fwidth",
        "fwidthCoarse",
        "fwidthFine",
    }
)

# Directive patterns. Every pattern is ASCII-only so that "word character"
# means [A-Za-z0-9_], as in GLSL itself.
INCLUDE_DIRECTIVE = re.compile(r"@include\s(.*)", re.ASCII)
NOMANGLE_DIRECTIVE = re.compile(r"@nomangle\s(.*)", re.ASCII)
DEFINE_DIRECTIVE = re.compile(r"@define\s(\S+)\s(.*)", re.ASCII)
ANY_DIRECTIVE = re.compile(r"@\w+", re.ASCII)

BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
LINE_COMMENT = re.compile(r"//[^\n]*")

# Lexer: a word, a run of operators, a single dot, or a preprocessor line
TOKEN_PATTERN = re.compile(r"\w+|[^\s\w#.]+|\.|#.*", re.ASCII)
PREPROCESSOR_DEFINE = re.compile(r"#define\s(\w+)\s(.*)", re.ASCII)
WORD_CHARACTER = re.compile(r"\w", re.ASCII)
