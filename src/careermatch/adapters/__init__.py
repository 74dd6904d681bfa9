"""Source-specific profile adapters."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .native import NativeProfileAdapter
from .questionnaire import QuestionnaireAdapter


@runtime_checkable
class ProfileAdapter(Protocol):
    """Source-specific profile adapter contract.

    Implementations transform source-native answer payloads into dictionaries
    that validate as a Profile.
    """

    source: str

    def can_handle(self, payload: Any) -> bool:
        """Return True when the adapter can parse the given payload."""

    def parse_profile(self, payload: Any) -> dict:
        """Parse one payload and return a Profile-shaped dictionary."""


__all__ = ["ProfileAdapter", "NativeProfileAdapter", "QuestionnaireAdapter"]
