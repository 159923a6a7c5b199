"""Unit tests for the Stageside exception hierarchy."""

from __future__ import annotations

import pytest

from stageside.utils.errors import ConfigurationError, InputError, StagesideError


class TestStagesideError:
    def test_message_without_source(self) -> None:
        error = StagesideError("boom")
        assert str(error) == "boom"
        assert error.message == "boom"
        assert error.source is None

    def test_source_prefixed(self) -> None:
        error = StagesideError("strength must be within 0..1", source="tables.yaml")
        assert str(error) == "[tables.yaml] strength must be within 0..1"
        assert error.source == "tables.yaml"

    def test_default_message(self) -> None:
        assert StagesideError().message == "An unexpected error occurred"


class TestSubclasses:
    @pytest.mark.parametrize("cls", [ConfigurationError, InputError])
    def test_inherit_from_base(self, cls: type[StagesideError]) -> None:
        with pytest.raises(StagesideError, match="bad"):
            raise cls(message="bad", source="x")

    def test_defaults(self) -> None:
        assert ConfigurationError().message == "Invalid or missing configuration"
        assert InputError().message == "Invalid input data"
