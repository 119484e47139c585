"""Chat templates: rendering a prompt into the text fed to a model."""

from __future__ import annotations

from typing import Any

from jinja2 import Environment

from .gguf import Gguf
from .prompt import Prompt

CHAT_TEMPLATE_KEY = "tokenizer.chat_template"


def _split(value: str, sep: str | None = None, maxsplit: int | None = None) -> list[str]:
    return value.split(sep, -1 if maxsplit is None else maxsplit)


class ChatTemplate:
    """A jinja chat template, normalised to filter syntax for `split` and `[-1]`."""

    def __init__(self, template: str = "") -> None:
        self.template = template.replace(".split(", "|split(").replace("[-1]", "|last")

    def __repr__(self) -> str:
        return f"ChatTemplate({self.template!r})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, ChatTemplate) and other.template == self.template

    @classmethod
    def from_gguf(cls, gguf: Gguf, default: str | None = None) -> "ChatTemplate":
        """The template stored in the file's metadata, else `default`."""
        value = gguf.metadata.get(CHAT_TEMPLATE_KEY)
        if value is not None:
            return cls(value.as_string())
        if default is None:
            raise LookupError(f"the model has no {CHAT_TEMPLATE_KEY} and no default was given")
        return cls(default)

    def apply(self, prompt: Prompt, bos: str, eos: str) -> str:
        """Render the prompt with the given begin- and end-of-sequence tokens."""
        env = Environment(trim_blocks=True)
        env.filters["split"] = _split
        env.globals.update(
            bos_token=bos,
            eos_token=eos,
            add_generation_prompt=True,
        )
        return env.from_string(self.template).render(prompt.to_jinja_input())