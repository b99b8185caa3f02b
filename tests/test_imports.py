"""Tests for ``module:attr`` resolution (utils/imports.py)."""

from __future__ import annotations

import collections
import os.path

import pytest

from exit_governor.exceptions import TargetImportError
from exit_governor.utils.imports import import_object


class TestImportObject:
    def test_function(self) -> None:
        assert import_object("os.path:join") is os.path.join

    def test_dotted_attribute(self) -> None:
        assert import_object("collections:OrderedDict.fromkeys") == (
            collections.OrderedDict.fromkeys
        )

    def test_surrounding_whitespace(self) -> None:
        assert import_object("  os.path:join ") is os.path.join

    @pytest.mark.parametrize("reference", ["os.path", ":join", "os.path:", ""])
    def test_malformed(self, reference: str) -> None:
        with pytest.raises(TargetImportError, match="Invalid reference") as exc_info:
            import_object(reference)
        assert exc_info.value.hint is not None

    def test_missing_module(self) -> None:
        with pytest.raises(TargetImportError, match="Cannot import module"):
            import_object("no_such_module_xyz:main")

    def test_missing_attribute(self) -> None:
        with pytest.raises(TargetImportError, match="has no attribute"):
            import_object("os.path:no_such_function")
