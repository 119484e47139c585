"""Recognising which model and tokenizer a GGUF file holds."""

from __future__ import annotations

from enum import Enum

from .gguf import Gguf
from .metadata import MetadataValueType

ARCHITECTURE_KEY = "general.architecture"
TOKENIZER_KEY = "tokenizer.ggml.model"


class UnrecognizedModelError(ValueError):
    """The file describes a model or tokenizer this package does not know."""


class ModelKind(Enum):
    LLAMA = "llama"
    QWEN = "qwen2"
    SAM = "segment-anything"

    def display_name(self) -> str:
        return self.value


class TokenizerKind(Enum):
    LLAMA = "llama"
    GPT2 = "gpt2"


def model_kind(gguf: Gguf) -> ModelKind:
    """The model family named by the file's architecture metadata."""
    value = gguf.metadata.get(ARCHITECTURE_KEY)
    if value is None or value.value_type is not MetadataValueType.STRING:
        raise UnrecognizedModelError("Unrecognized model")
    name = value.value.lower()
    if "llama" in name:
        return ModelKind.LLAMA
    if "qwen2" in name:
        return ModelKind.QWEN
    if "sam" in name:
        return ModelKind.SAM
    raise UnrecognizedModelError("Unrecognized model")


def tokenizer_kind(gguf: Gguf) -> TokenizerKind:
    """The tokenizer family named by the file's tokenizer metadata."""
    value = gguf.metadata.get(TOKENIZER_KEY)
    if value is None:
        raise UnrecognizedModelError(f"Missing {TOKENIZER_KEY}")
    name = value.as_string()
    try:
        return TokenizerKind(name)
    except ValueError:
        raise UnrecognizedModelError(f"Unrecognized tokenizer type: {name}") from None