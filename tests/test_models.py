import pytest

from slai.gguf import Gguf
from slai.metadata import MetadataValue, MetadataValueType
from slai.models import (
    ModelKind,
    TokenizerKind,
    UnrecognizedModelError,
    model_kind,
    tokenizer_kind,
)


def _gguf(**strings):
    metadata = {
        key.replace("__", "."): MetadataValue(MetadataValueType.STRING, value)
        for key, value in strings.items()
    }
    return Gguf(version=3, metadata=metadata, tensors={})


@pytest.mark.parametrize(
    "arch, expected",
    [
        ("llama", ModelKind.LLAMA),
        ("TinyLlama", ModelKind.LLAMA),
        ("qwen2", ModelKind.QWEN),
        ("Qwen2", ModelKind.QWEN),
        ("sam", ModelKind.SAM),
    ],
)
def test_model_kind(arch, expected):
    assert model_kind(_gguf(general__architecture=arch)) is expected


def test_display_names():
    assert ModelKind.LLAMA.display_name() == "llama"
    assert ModelKind.QWEN.display_name() == "qwen2"
    assert ModelKind.SAM.display_name() == "segment-anything"


def test_unknown_architecture():
    with pytest.raises(UnrecognizedModelError):
        model_kind(_gguf(general__architecture="mamba"))


def test_missing_architecture():
    with pytest.raises(UnrecognizedModelError):
        model_kind(_gguf())


def test_non_string_architecture():
    gguf = Gguf(
        version=3,
        metadata={"general.architecture": MetadataValue(MetadataValueType.U32, 1)},
        tensors={},
    )
    with pytest.raises(UnrecognizedModelError):
        model_kind(gguf)


def test_tokenizer_kind():
    assert tokenizer_kind(_gguf(tokenizer__ggml__model="gpt2")) is TokenizerKind.GPT2
    assert tokenizer_kind(_gguf(tokenizer__ggml__model="llama")) is TokenizerKind.LLAMA


def test_tokenizer_missing():
    with pytest.raises(UnrecognizedModelError, match="Missing tokenizer.ggml.model"):
        tokenizer_kind(_gguf())


def test_tokenizer_unknown():
    with pytest.raises(UnrecognizedModelError, match="Unrecognized tokenizer type: bert"):
        tokenizer_kind(_gguf(tokenizer__ggml__model="bert"))