"""Fixtures and configuration for pytest."""

import pytest
from loguru import logger

from glsl_minify.resolver import MemoryResolver
from glsl_minify.symbols import TokenMap


@pytest.fixture
def tokens():
    """Fixture providing a fresh symbol table."""
    return TokenMap()


@pytest.fixture
def resolver():
    """Fixture providing an in-memory include tree.

    shaders/main.glsl includes lib/a.glsl (relative to shaders/), which in turn
    includes b.glsl from its own directory.
    """
    return MemoryResolver(
        {
            "shaders/lib/a.glsl": '@include "b.glsl"\nfloat a;',
            "shaders/lib/b.glsl": "// helper\nfloat b;",
            "shaders/common.glsl": "/* shared */float common;",
        }
    )


@pytest.fixture
def log_messages():
    """Collect warning messages logged through loguru."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)
