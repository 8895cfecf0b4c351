from __future__ import annotations

from fastapi import Request

from skillsphere.ai.factory import get_completion_client
from skillsphere.store.base import KeyValueStore


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


__all__ = ["get_completion_client", "get_store"]
