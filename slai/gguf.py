"""Loading GGUF model files: header, metadata and tensors."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike
from pathlib import Path
from typing import Iterator

from .metadata import (
    ByteReader,
    GgufParseError,
    IncorrectMagicNumberError,
    MetadataValue,
    MetadataValueType,
    UnsupportedTensorTypeError,
)

GGUF_FILE_MAGIC_LE = 0x46554747
GGUF_FILE_MAGIC_BE = 0x47475546
DEFAULT_ALIGNMENT = 32
MAX_TENSOR_DIMS = 4


def align_offset(offset: int, alignment: int) -> int:
    """Round `offset` up to the next multiple of `alignment`."""
    if alignment <= 0:
        raise ValueError(f"alignment must be positive, got {alignment}")
    return offset + (alignment - offset % alignment) % alignment


class TensorType(IntEnum):
    """Type tags of GGUF tensors."""

    F32 = 0
    F16 = 1
    Q4_0 = 2
    Q4_1 = 3
    Q5_0 = 6
    Q5_1 = 7
    Q8_0 = 8
    Q8_1 = 9
    Q2K = 10
    Q3K = 11
    Q4K = 12
    Q5K = 13
    Q6K = 14
    Q8K = 15
    IQ2_XXS = 16
    IQ2_XS = 17
    IQ3_XXS = 18
    IQ1_S = 19
    IQ4_NL = 20
    IQ3_S = 21
    IQ2_S = 22
    IQ4_XS = 23
    I8 = 24
    I16 = 25
    I32 = 26
    I64 = 27
    F64 = 28
    IQ1_M = 29

    @classmethod
    def from_tag(cls, tag: int) -> "TensorType":
        """The tensor type for a tag, or UnsupportedTensorTypeError."""
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedTensorTypeError(tag) from None


# Element formats of the tensor types whose data is loaded in memory.
_LOADED_FORMATS = {
    TensorType.F32: "f",
    TensorType.F16: "e",
}


@dataclass
class GgufTensor:
    """A tensor description and, for plain float types, its values.

    `dimensions` is `(nrows, ncols, nmats, ncubes)`: the first two are swapped
    compared to the file, which stores the number of columns first.
    `offset` is relative to the start of the file.
    """

    dimensions: tuple[int, int, int, int]
    offset: int
    tensor_type: TensorType
    data: list[float] | None = None

    def __len__(self) -> int:
        nrows, ncols, nmats, ncubes = self.dimensions
        return nrows * ncols * nmats * ncubes

    def as_f32(self) -> list[float] | None:
        """The values of an F32 tensor, or None for any other type."""
        if self.tensor_type is TensorType.F32:
            return self.data
        return None


def _debug_value(value: MetadataValue) -> str:
    inner = value.value
    if value.value_type is MetadataValueType.BOOL:
        text = "true" if inner else "false"
    elif value.value_type is MetadataValueType.STRING:
        text = json.dumps(inner, ensure_ascii=False)
    else:
        text = repr(inner)
    return f"{value.value_type.name.capitalize()}({text})"


@dataclass
class Gguf:
    """A parsed GGUF file."""

    version: int
    metadata: dict[str, MetadataValue]
    tensors: dict[str, GgufTensor]

    @classmethod
    def from_bytes(cls, data: bytes) -> "Gguf":
        """Parse a whole GGUF file held in memory."""
        reader = ByteReader(data)
        magic = reader.read_u32()
        if magic not in (GGUF_FILE_MAGIC_LE, GGUF_FILE_MAGIC_BE):
            raise IncorrectMagicNumberError(magic)
        version = reader.read_u32()
        tensor_count = reader.read_u64()
        metadata_count = reader.read_u64()

        metadata: dict[str, MetadataValue] = {}
        for _ in range(metadata_count):
            key = reader.read_string()
            metadata[key] = reader.read_value(reader.read_u32())

        alignment_value = metadata.get("general.alignment")
        alignment = (
            alignment_value.value
            if alignment_value is not None
            and alignment_value.value_type is MetadataValueType.U32
            else DEFAULT_ALIGNMENT
        )
        if alignment == 0:
            raise GgufParseError("general.alignment must not be zero")

        tensors: dict[str, GgufTensor] = {}
        for _ in range(tensor_count):
            name = reader.read_string()
            ndims = reader.read_u32()
            if ndims > MAX_TENSOR_DIMS:
                raise GgufParseError(
                    f"tensors of dimensions larger than {MAX_TENSOR_DIMS} are not supported "
                    f"(tensor {name!r} has {ndims})"
                )
            dims = reader.read_scalars("Q", ndims) + [1] * (MAX_TENSOR_DIMS - ndims)
            dims[0], dims[1] = dims[1], dims[0]
            tensor_type = TensorType.from_tag(reader.read_u32())
            offset = reader.read_u64()
            tensors[name] = GgufTensor(tuple(dims), offset, tensor_type)

        data_start = align_offset(reader.offset, alignment)
        for tensor in tensors.values():
            tensor.offset += data_start
            fmt = _LOADED_FORMATS.get(tensor.tensor_type)
            if fmt is not None:
                tensor.data = ByteReader(data, tensor.offset).read_scalars(fmt, len(tensor))

        return cls(version=version, metadata=metadata, tensors=tensors)

    @classmethod
    def from_path(cls, path: str | PathLike[str]) -> "Gguf":
        """Read and parse a GGUF file from disk."""
        return cls.from_bytes(Path(path).read_bytes())

    def metadata_debug_strings(self) -> Iterator[str]:
        """One line per metadata entry; arrays are shown by their length only."""
        for key, value in self.metadata.items():
            if value.value_type is MetadataValueType.ARRAY:
                yield f"{key} = array[{len(value.value)}]"
            else:
                yield f"{key} = {_debug_value(value)}"

    def tensors_debug_strings(self) -> Iterator[str]:
        """One line per tensor, sorted by name, with its dimensions."""
        for name in sorted(self.tensors):
            yield f"{name} -> {list(self.tensors[name].dimensions)}"

    def print_metadata(self) -> None:
        for line in self.metadata_debug_strings():
            print(line)

    def print_tensors(self) -> None:
        for line in self.tensors_debug_strings():
            print(line)