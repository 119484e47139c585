"""Chat prompts: the ordered list of user, assistant and system messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(Enum):
    """Who wrote a prompt entry."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class PromptEntry:
    """One message of a conversation."""

    role: Role
    text: str

    def __str__(self) -> str:
        return f"[{self.role.label}] {self.text}"


@dataclass
class Prompt:
    """A conversation, in the order its messages were added."""

    entries: list[PromptEntry] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(f"{entry}\n" for entry in self.entries)

    def append_user(self, text: str) -> None:
        """Append a text typed by the user."""
        self.entries.append(PromptEntry(Role.USER, text))

    def append_assistant(self, text: str) -> None:
        """Append a response from the chatbot."""
        self.entries.append(PromptEntry(Role.ASSISTANT, text))

    def append_system(self, text: str) -> None:
        """Append system configuration for the chatbot."""
        self.entries.append(PromptEntry(Role.SYSTEM, text))

    def to_jinja_input(self) -> dict[str, Any]:
        """The template context: a `messages` list of role/content mappings."""
        return {
            "messages": [
                {"role": entry.role.value, "content": entry.text}
                for entry in self.entries
            ]
        }

    def clear(self) -> None:
        self.entries.clear()