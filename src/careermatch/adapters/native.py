"""Adapter for payloads already shaped like a Profile."""

from __future__ import annotations

import json
from typing import Any

from ..schemas import Profile


class NativeProfileAdapter:
    """Validate payloads that use Profile field names and value ids."""

    source = "native"

    def can_handle(self, payload: Any) -> bool:
        try:
            data = self._load(payload)
        except ValueError:
            return False
        return "education_commitment" in data and "grade" in data

    def parse_profile(self, payload: Any) -> dict[str, Any]:
        return Profile.model_validate(self._load(payload)).model_dump(mode="python")

    @staticmethod
    def _load(payload: Any) -> dict[str, Any]:
        if isinstance(payload, dict):
            return payload
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        try:
            data = json.loads(payload)
        except (TypeError, json.JSONDecodeError) as exc:
            raise ValueError("Invalid profile payload") from exc
        if not isinstance(data, dict):
            raise ValueError("Profile payload must be a JSON object")
        return data
