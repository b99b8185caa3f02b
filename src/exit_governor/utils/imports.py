"""Resolve ``"package.module:attribute"`` references."""

from __future__ import annotations

import importlib
from typing import Any

from exit_governor.exceptions import TargetImportError


def import_object(reference: str) -> Any:
    """Import and return the object named by *reference*.

    *reference* has the form ``module:attr`` where ``attr`` may be a
    dotted path (``pkg.cli:App.main``).

    Raises
    ------
    TargetImportError
        If the reference is malformed, the module cannot be imported,
        or the attribute does not exist.
    """
    module_name, sep, attr_path = reference.strip().partition(":")
    if not sep or not module_name or not attr_path:
        raise TargetImportError(
            f"Invalid reference: {reference!r}",
            hint="Use the form 'package.module:function'.",
        )

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise TargetImportError(
            f"Cannot import module {module_name!r}: {exc}",
        ) from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise TargetImportError(
                f"{module_name!r} has no attribute {attr_path!r}",
            ) from exc
    return obj
