from .base import InMemoryStore, KeyValueStore
from .records import CircleFull, CircleNotFound, ProjectNotFound

__all__ = [
    "CircleFull",
    "CircleNotFound",
    "InMemoryStore",
    "KeyValueStore",
    "ProjectNotFound",
]
