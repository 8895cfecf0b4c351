from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Iterable

from .base import KeyValueStore

LEARNING_PROGRESS = "learning_progress"
PORTFOLIOS = "portfolios"
CAREER_PERSONAS = "career_personas"
PEER_CIRCLES = "peer_circles"
ALL_CIRCLES_KEY = "all"

DEFAULT_MAX_PARTICIPANTS = 4
_PROTECTED_PROJECT_FIELDS = {"id", "createdAt"}


class ProjectNotFound(LookupError):
    def __init__(self, project_id: str):
        super().__init__("Project not found")
        self.project_id = project_id


class CircleNotFound(LookupError):
    def __init__(self, circle_id: str):
        super().__init__("Circle not found")
        self.circle_id = circle_id


class CircleFull(ValueError):
    def __init__(self, circle_id: str):
        super().__init__("Circle is full")
        self.circle_id = circle_id


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


def split_csv(value: str | Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    return [str(item).strip() for item in items if str(item).strip()]


# Learning progress


def get_completed_courses(store: KeyValueStore, user_id: str) -> list[str]:
    return list(store.get(LEARNING_PROGRESS, user_id) or [])


def mark_course_complete(store: KeyValueStore, user_id: str, course_id: str) -> list[str]:
    completed = get_completed_courses(store, user_id)
    if course_id not in completed:
        completed.append(course_id)
    store.set(LEARNING_PROGRESS, user_id, completed)
    return completed


# Career personas


def get_persona(store: KeyValueStore, user_id: str) -> dict[str, Any] | None:
    return store.get(CAREER_PERSONAS, user_id)


def save_persona(store: KeyValueStore, user_id: str, persona: dict[str, Any]) -> dict[str, Any]:
    store.set(CAREER_PERSONAS, user_id, persona)
    return persona


# Portfolio projects


def list_projects(store: KeyValueStore, user_id: str) -> list[dict[str, Any]]:
    return list(store.get(PORTFOLIOS, user_id) or [])


def add_project(store: KeyValueStore, user_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    project = {key: value for key, value in fields.items() if key not in _PROTECTED_PROJECT_FIELDS}
    project["id"] = _new_id()
    project["technologies"] = split_csv(fields.get("technologies"))
    project["createdAt"] = _utc_now_iso()

    projects = list_projects(store, user_id)
    projects.append(project)
    store.set(PORTFOLIOS, user_id, projects)
    return project


def update_project(store: KeyValueStore, user_id: str, project_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    projects = list_projects(store, user_id)
    for index, existing in enumerate(projects):
        if existing.get("id") != project_id:
            continue
        updated = dict(existing)
        updated.update({key: value for key, value in fields.items() if key not in _PROTECTED_PROJECT_FIELDS})
        if "technologies" in fields:
            updated["technologies"] = split_csv(fields.get("technologies"))
        projects[index] = updated
        store.set(PORTFOLIOS, user_id, projects)
        return updated
    raise ProjectNotFound(project_id)


def delete_project(store: KeyValueStore, user_id: str, project_id: str) -> None:
    projects = store.get(PORTFOLIOS, user_id)
    if projects is None:
        return
    store.set(PORTFOLIOS, user_id, [p for p in projects if p.get("id") != project_id])


# Peer learning circles


def list_circles(store: KeyValueStore) -> list[dict[str, Any]]:
    return list(store.get(PEER_CIRCLES, ALL_CIRCLES_KEY) or [])


def create_circle(store: KeyValueStore, fields: dict[str, Any]) -> dict[str, Any]:
    circle = dict(fields)
    circle["id"] = _new_id()
    circle["maxParticipants"] = int(fields.get("maxParticipants") or DEFAULT_MAX_PARTICIPANTS)
    circle["participants"] = [fields["creatorId"]]
    circle["createdAt"] = _utc_now_iso()

    circles = list_circles(store)
    circles.append(circle)
    store.set(PEER_CIRCLES, ALL_CIRCLES_KEY, circles)
    return circle


def join_circle(store: KeyValueStore, circle_id: str, user_id: str) -> dict[str, Any]:
    circles = list_circles(store)
    for circle in circles:
        if circle.get("id") != circle_id:
            continue
        participants = circle.setdefault("participants", [])
        # Capacity is checked before membership, so a member re-joining a
        # full circle is also refused.
        if len(participants) >= int(circle.get("maxParticipants") or DEFAULT_MAX_PARTICIPANTS):
            raise CircleFull(circle_id)
        if user_id not in participants:
            participants.append(user_id)
            store.set(PEER_CIRCLES, ALL_CIRCLES_KEY, circles)
        return circle
    raise CircleNotFound(circle_id)
