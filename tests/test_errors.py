"""Tests for the minifier exceptions."""

import pytest

from glsl_minify.errors import DirectiveSyntaxError, InclusionError, MinifierError


def test_inclusion_error_message():
    """Test that the message names the file and the requester."""
    error = InclusionError("noise.glsl", "/shaders/main.frag", "not found")

    assert str(error) == 'Failed to include "noise.glsl" from /shaders/main.frag: not found'
    assert error.filename == "noise.glsl"
    assert error.requested_by == "/shaders/main.frag"


def test_inclusion_error_inline():
    """Test that a missing requester is reported as inline."""
    error = InclusionError("noise.glsl")

    assert error.requested_by == "inline"
    assert str(error) == 'Failed to include "noise.glsl" from inline'


def test_directive_syntax_error_message():
    """Test that the message quotes the offending line."""
    error = DirectiveSyntaxError("@define", "  @define  ")

    assert str(error) == "Malformed @define directive: '@define'"


@pytest.mark.parametrize("error_class", [InclusionError, DirectiveSyntaxError])
def test_errors_share_base_class(error_class):
    """Test that every minifier error can be caught as MinifierError."""
    assert issubclass(error_class, MinifierError)
    assert issubclass(error_class, Exception)
