"""Validation errors shared by rule definitions and expression evaluation."""

from __future__ import annotations

from typing import Any


class ValidationError(Exception):
    """Error with a stable machine-readable code plus free-form context.

    Attributes:
        code: Short identifier such as ``"unknown_pattern_id"``
        message: Human readable description
        context: Extra keyword details supplied at the raise site
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if not self.context:
            return f"[{self.code}] {self.message}"
        details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.context.items()))
        return f"[{self.code}] {self.message} ({details})"


class ExpressionError(ValidationError):
    """A ToNode attribute expression could not be parsed or evaluated."""


__all__ = ["ValidationError", "ExpressionError"]
