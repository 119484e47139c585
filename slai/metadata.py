"""Low-level GGUF reading: errors, metadata values and a little-endian byte reader."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class GgufParseError(Exception):
    """Raised when a GGUF byte stream cannot be parsed."""


class IncorrectMagicNumberError(GgufParseError):
    """The stream does not start with a GGUF magic number."""

    def __init__(self, magic: int) -> None:
        self.magic = magic
        super().__init__(
            f"the input file isn’t a ggml binary file. Got a magic number of {magic:#x} "
            "instead of 0x46554747 or 0x47475546."
        )


class UnsupportedMetadataValueTypeError(GgufParseError):
    """A metadata value carries a type tag this reader does not know."""

    def __init__(self, value_type: int) -> None:
        self.value_type = value_type
        super().__init__(
            f"metadata value of type {value_type} is not part of the supported gguf version"
        )


class UnsupportedTensorTypeError(GgufParseError):
    """A tensor carries a type tag this reader does not know."""

    def __init__(self, tag: int) -> None:
        self.tag = tag
        super().__init__(f"tensor of type {tag} is not part of the supported gguf version")


class MetadataValueType(IntEnum):
    """Type tags of GGUF metadata values."""

    U8 = 0
    I8 = 1
    U16 = 2
    I16 = 3
    U32 = 4
    I32 = 5
    F32 = 6
    BOOL = 7
    STRING = 8
    ARRAY = 9
    U64 = 10
    I64 = 11
    F64 = 12


_SCALAR_FORMATS = {
    MetadataValueType.U8: "B",
    MetadataValueType.I8: "b",
    MetadataValueType.U16: "H",
    MetadataValueType.I16: "h",
    MetadataValueType.U32: "I",
    MetadataValueType.I32: "i",
    MetadataValueType.F32: "f",
    MetadataValueType.U64: "Q",
    MetadataValueType.I64: "q",
    MetadataValueType.F64: "d",
}


def _value_type(tag: int) -> MetadataValueType:
    try:
        return MetadataValueType(tag)
    except ValueError:
        raise UnsupportedMetadataValueTypeError(tag) from None


@dataclass
class MetadataArray:
    """A typed array of metadata values; nested arrays hold MetadataArray items."""

    element_type: MetadataValueType
    values: list[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)


@dataclass
class MetadataValue:
    """A single typed metadata value."""

    value_type: MetadataValueType
    value: Any

    def _expect(self, value_type: MetadataValueType) -> Any:
        if self.value_type is not value_type:
            raise TypeError(
                f"unexpected GGUF attribute type: expected {value_type.name}, "
                f"found {self.value_type.name}"
            )
        return self.value

    def _expect_array(self, element_type: MetadataValueType) -> list[Any]:
        array = self._expect(MetadataValueType.ARRAY)
        if array.element_type is not element_type:
            raise TypeError(
                f"unexpected GGUF attribute type: expected array of {element_type.name}, "
                f"found array of {array.element_type.name}"
            )
        return array.values

    def as_u32(self) -> int:
        """The value as an unsigned 32-bit integer."""
        return self._expect(MetadataValueType.U32)

    def array_len(self) -> int:
        """The number of elements of an array value."""
        return len(self._expect(MetadataValueType.ARRAY))

    def as_f32(self) -> float:
        """The value as a 32-bit float."""
        return self._expect(MetadataValueType.F32)

    def as_string(self) -> str:
        """The value as a string."""
        return self._expect(MetadataValueType.STRING)

    def as_string_array(self) -> list[str]:
        """The value as a list of strings."""
        return self._expect_array(MetadataValueType.STRING)

    def as_f32_array(self) -> list[float]:
        """The value as a list of 32-bit floats."""
        return self._expect_array(MetadataValueType.F32)


class ByteReader:
    """Sequential little-endian reader over a byte buffer."""

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self.data = memoryview(data).cast("B")
        self.offset = offset

    def _take(self, size: int) -> memoryview:
        end = self.offset + size
        if size < 0 or end > len(self.data):
            raise GgufParseError(
                f"unexpected end of data: need {size} bytes at offset {self.offset}, "
                f"buffer holds {len(self.data)}"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def read_scalars(self, fmt: str, count: int) -> list[Any]:
        """Read `count` consecutive values of the struct format character `fmt`."""
        layout = struct.Struct(f"<{count}{fmt}")
        return list(layout.unpack(self._take(layout.size)))

    def _read_scalar(self, fmt: str) -> Any:
        return self.read_scalars(fmt, 1)[0]

    def read_u32(self) -> int:
        return self._read_scalar("I")

    def read_u64(self) -> int:
        return self._read_scalar("Q")

    def read_string(self) -> str:
        """Read a u64 length-prefixed UTF-8 string, replacing invalid bytes."""
        length = self.read_u64()
        return bytes(self._take(length)).decode("utf-8", errors="replace")

    def read_value(self, value_type: MetadataValueType | int) -> MetadataValue:
        """Read one metadata value of the given type."""
        value_type = _value_type(value_type)
        if value_type is MetadataValueType.BOOL:
            value: Any = self._read_scalar("B") != 0
        elif value_type is MetadataValueType.STRING:
            value = self.read_string()
        elif value_type is MetadataValueType.ARRAY:
            value = self.read_array(_value_type(self.read_u32()))
        else:
            value = self._read_scalar(_SCALAR_FORMATS[value_type])
        return MetadataValue(value_type, value)

    def read_array(self, value_type: MetadataValueType | int) -> MetadataArray:
        """Read a u64 length-prefixed array whose elements have the given type."""
        value_type = _value_type(value_type)
        length = self.read_u64()
        if value_type is MetadataValueType.BOOL:
            values: list[Any] = [byte != 0 for byte in self._take(length)]
        elif value_type is MetadataValueType.STRING:
            values = [self.read_string() for _ in range(length)]
        elif value_type is MetadataValueType.ARRAY:
            values = [self.read_array(_value_type(self.read_u32())) for _ in range(length)]
        else:
            values = self.read_scalars(_SCALAR_FORMATS[value_type], length)
        return MetadataArray(value_type, values)