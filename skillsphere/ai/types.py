from dataclasses import dataclass
from typing import Any, Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class CompletionError(RuntimeError):
    """The completion service failed or returned nothing usable."""


class CompletionUnavailable(CompletionError):
    """No credential is configured for the completion service."""


class CompletionClient(Protocol):
    model: str

    def complete(self, messages: Sequence[ChatMessage], temperature: float) -> str: ...

    def proxy(self, payload: dict[str, Any]) -> dict[str, Any]: ...
