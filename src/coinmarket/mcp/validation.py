# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Argument validation, default merging and business-rule checks.

These run in order before any network access:

    validate_arguments -> merge_defaults -> check_rule
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from coinmarket.core.exceptions import ValidationException

from .operations import OperationDescriptor


def validate_arguments(descriptor: OperationDescriptor, arguments: Any) -> dict[str, Any]:
    """Check declared parameters are strings.

    Declared fields that are absent stay absent; an explicit None is kept as
    an "unset" marker. Undeclared keys are passed through untouched.

    Raises:
        ValidationException: naming the first declared field holding a non-string.
    """
    if arguments is None:
        return {}
    if not isinstance(arguments, Mapping):
        raise ValidationException(f"Arguments must be an object, got {type(arguments).__name__}")

    for name in descriptor.parameter_names:
        if name not in arguments:
            continue
        value = arguments[name]
        if value is not None and not isinstance(value, str):
            raise ValidationException(
                f"Invalid value for '{name}': expected string, got {type(value).__name__}",
                field=name,
                value=value,
            )
    return dict(arguments)


def merge_defaults(defaults: Mapping[str, Any], arguments: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay caller arguments on the defaults.

    A key the caller supplied wins even when its value is None, which drops
    that parameter from the upstream query despite the default.
    """
    # NOTE: key presence, not truthiness, decides the winner; see DESIGN.md.
    merged = dict(defaults)
    merged.update(arguments)
    return merged


def check_rule(descriptor: OperationDescriptor, params: Mapping[str, Any]) -> None:
    """Raise ValidationException if the operation's business rule rejects params."""
    if descriptor.rule is None:
        return
    message = descriptor.rule(params)
    if message is not None:
        raise ValidationException(message)
