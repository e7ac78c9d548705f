"""
Unit tests for the value validators.
"""

import pytest

from subbuild.validation import (
    ValidationError,
    validate_command,
    validate_non_empty_string,
    validate_relative_name,
    validate_string,
)


@pytest.mark.unit
class TestValidators:
    """Test cases for the individual validators."""

    def test_command_from_string(self):
        assert validate_command("cargo prove build") == ["cargo", "prove", "build"]

    def test_command_from_string_with_quotes(self):
        assert validate_command("tool 'two words'") == ["tool", "two words"]

    def test_command_from_list(self):
        assert validate_command(("cargo", "prove", "build")) == ["cargo", "prove", "build"]

    def test_command_unbalanced_quotes(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_command("cargo 'prove", field_name="cmd")

        assert exc_info.value.field_name == "cmd"

    def test_relative_name_accepts_nested_paths(self):
        assert validate_relative_name("crates/src") == "crates/src"

    def test_relative_name_rejects_parent(self):
        with pytest.raises(ValidationError):
            validate_relative_name("../src")

    @pytest.mark.parametrize("name", [".", "./", "src/.."])
    def test_relative_name_rejects_program_dir_itself(self, name):
        with pytest.raises(ValidationError):
            validate_relative_name(name)

    def test_non_empty_string(self):
        assert validate_non_empty_string("RUSTC") == "RUSTC"
        with pytest.raises(ValidationError):
            validate_non_empty_string("")
        with pytest.raises(ValidationError):
            validate_non_empty_string(None)

    def test_string_allows_empty(self):
        assert validate_string("") == ""
        with pytest.raises(ValidationError):
            validate_string(5)
