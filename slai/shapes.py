"""Output-shape rules of the tensor operations, on 4-dimensional shapes.

Shapes are `(nrows, ncols, nmats, ncubes)`. The ggml-style axis numbering
swaps the first two axes: ggml axis 0 is the number of columns and ggml
axis 1 the number of rows.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

MAX_DIMS = 4

# Position in a `(nrows, ncols, nmats, ncubes)` shape of each ggml axis.
GGML_AXES = (1, 0, 2, 3)

Shape = tuple[int, int, int, int]


class MatrixMode(Enum):
    """Whether a matrix operand is used as is or transposed."""

    NORMAL = "normal"
    TRANSPOSED = "transposed"


def full_shape(size: Iterable[int]) -> Shape:
    """Pad a shape of at most four dimensions with trailing ones."""
    dims = [int(dim) for dim in size]
    if len(dims) > MAX_DIMS:
        raise ValueError(
            f"tensors of dimensions higher than {MAX_DIMS} are not supported "
            f"(got {len(dims)} dimensions)"
        )
    if any(dim < 0 for dim in dims):
        raise ValueError(f"tensor dimensions must not be negative: {dims}")
    dims.extend([1] * (MAX_DIMS - len(dims)))
    return tuple(dims)  # type: ignore[return-value]


def _ggml(shape: Shape, axis: int) -> int:
    return shape[GGML_AXES[axis]]


def matmul_output_shape(
    a: Iterable[int],
    b: Iterable[int],
    a_mode: MatrixMode = MatrixMode.NORMAL,
    b_mode: MatrixMode = MatrixMode.NORMAL,
) -> Shape:
    """Shape of `op(a) * op(b)`, the batch axes taking the larger of both operands."""
    mrows, mcols, mmats, mcubes = full_shape(a)
    vrows, vcols, vmats, vcubes = full_shape(b)
    rows = mrows if a_mode is MatrixMode.NORMAL else mcols
    cols = vcols if b_mode is MatrixMode.NORMAL else vrows
    return (rows, cols, max(vmats, mmats), max(vcubes, mcubes))


def matmul_quant_output_shape(a: Iterable[int], b: Iterable[int]) -> Shape:
    """Shape of the product of a quantized matrix `a` with the tensor `b`."""
    mrows, mcols, mmats, mcubes = full_shape(a)
    vrows, vcols, vmats, vcubes = full_shape(b)
    if mcols != vrows:
        raise ValueError(f"matmul dimension mismatch: {mcols} columns against {vrows} rows")
    if mmats != 1:
        raise ValueError("not supported: quantized operand with more than one matrix")
    if mcubes == 1:
        raise ValueError("not supported: quantized operand with a single cube")
    return (mrows, vcols, vmats, vcubes)


def check_repeatable(a: Iterable[int], b: Iterable[int]) -> Shape:
    """Check that `b` is a whole multiple of `a` on every axis and return `b`'s shape."""
    shape_a = full_shape(a)
    shape_b = full_shape(b)
    for axis, (dim_a, dim_b) in enumerate(zip(shape_a, shape_b)):
        if dim_a == 0 or dim_b % dim_a != 0:
            raise ValueError(
                f"cannot repeat {shape_a} into {shape_b}: axis {axis} "
                f"({dim_b}) is not a multiple of {dim_a}"
            )
    return shape_b


def win_part_shape(size: Iterable[int], window_size: int) -> Shape:
    """Shape of the window partition of `size` into windows of `window_size`."""
    shape = full_shape(size)
    w = window_size
    if w <= 0:
        raise ValueError(f"window size must be positive, got {w}")
    if shape[3] != 1:
        raise ValueError(f"window partition needs a single cube, got {shape[3]}")
    g1 = _ggml(shape, 1)
    g2 = _ggml(shape, 2)
    px = (w - g1 % w) % w
    py = (w - g2 % w) % w
    npx = (px + g1) // w
    npy = (py + g2) // w
    return (w, _ggml(shape, 0), w, npx * npy)


def win_unpart_shape(size: Iterable[int], w0: int, h0: int) -> Shape:
    """Shape of the tensor rebuilt from window partitions of `size`."""
    shape = full_shape(size)
    return (w0, _ggml(shape, 0), h0, 1)


def get_rel_pos_shape(size: Iterable[int], qh: int, kh: int) -> Shape:
    """Shape of the relative positional embeddings taken from `size`."""
    shape = full_shape(size)
    return (kh, _ggml(shape, 0), qh, 1)


def rounded_attention_positions(pos: int) -> int:
    """Number of attended positions up to `pos`, rounded up to a multiple of 4."""
    if pos < 0:
        raise ValueError(f"position must not be negative, got {pos}")
    return -(-(pos + 1) // 4) * 4