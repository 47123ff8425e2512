"""Structured result returned by field validators instead of raising."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ValidationResult(BaseModel):
    valid: bool
    value: Any = None
    error: str | None = None
    errors: list[str] | None = None
