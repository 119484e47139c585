"""Output-shape rules of the convolution operations (im2col, conv_2d, transposed conv_2d).

Shapes are `(nrows, ncols, nmats, ncubes)`. Kernels and inputs follow the ggml
axis numbering: ggml axis 0 is the number of columns and ggml axis 1 the number
of rows. A 2D kernel is `[KW, KH, IC, OC]` and a 2D input `[W, H, C, N]` in
ggml order.
"""

from __future__ import annotations

from typing import Iterable

from .shapes import GGML_AXES, Shape, full_shape


def _ggml(shape: Shape, axis: int) -> int:
    return shape[GGML_AXES[axis]]


def conv_output_size(ins: int, ks: int, s: int, p: int, d: int) -> int:
    """Length of a convolution output along one axis."""
    if s <= 0:
        raise ValueError(f"stride must be positive, got {s}")
    if d <= 0:
        raise ValueError(f"dilation must be positive, got {d}")
    if ks <= 0:
        raise ValueError(f"kernel size must be positive, got {ks}")
    span = ins + 2 * p - d * (ks - 1) - 1
    if span < 0:
        raise ValueError("input too small compared to kernel")
    return span // s + 1


def conv_transpose_output_size(ins: int, ks: int, s: int, p: int) -> int:
    """Length of a transposed convolution output along one axis."""
    if s <= 0:
        raise ValueError(f"stride must be positive, got {s}")
    if ins <= 0:
        raise ValueError(f"input size must be positive, got {ins}")
    size = (ins - 1) * s - 2 * p + ks
    if size <= 0:
        raise ValueError("padding too large for the transposed convolution")
    return size


def im2col_output_shape(
    kernel: Iterable[int],
    input: Iterable[int],
    s0: int,
    s1: int,
    p0: int,
    p1: int,
    d0: int,
    d1: int,
    is_2d: bool,
) -> Shape:
    """Shape of the im2col unfolding of `input` for the convolution `kernel`.

    Strides, paddings and dilations are given for ggml axes 0 and 1.
    """
    ksz = full_shape(kernel)
    isz = full_shape(input)

    if is_2d:
        if _ggml(ksz, 2) != _ggml(isz, 2):
            raise ValueError(
                f"channel mismatch: kernel has {_ggml(ksz, 2)}, input has {_ggml(isz, 2)}"
            )
    else:
        if _ggml(ksz, 1) != _ggml(isz, 1):
            raise ValueError(
                f"channel mismatch: kernel has {_ggml(ksz, 1)}, input has {_ggml(isz, 1)}"
            )
        if _ggml(isz, 3) != 1:
            raise ValueError("1D im2col needs an input with a single cube")

    oh = conv_output_size(_ggml(isz, 1), _ggml(ksz, 1), s1, p1, d1) if is_2d else 0
    ow = conv_output_size(_ggml(isz, 0), _ggml(ksz, 0), s0, p0, d0)

    if is_2d:
        unfolded = _ggml(ksz, 0) * _ggml(ksz, 1) * _ggml(ksz, 2)
        return (ow, unfolded, oh, _ggml(isz, 3))
    return (ow, _ggml(ksz, 0) * _ggml(ksz, 1), _ggml(isz, 2), 1)


def im2col_sk_p0_output_shape(kernel: Iterable[int], input: Iterable[int]) -> Shape:
    """im2col with a stride equal to the kernel size, no padding and no dilation."""
    ksz = full_shape(kernel)
    return im2col_output_shape(
        ksz, input, _ggml(ksz, 0), _ggml(ksz, 1), 0, 0, 1, 1, True
    )


def conv_2d_output_shape(
    kernel: Iterable[int],
    input: Iterable[int],
    s0: int,
    s1: int,
    p0: int,
    p1: int,
    d0: int,
    d1: int,
) -> Shape:
    """Shape of a 2D convolution result: `[OW, OH, OC, N]` in ggml order."""
    ksz = full_shape(kernel)
    im2col = im2col_output_shape(ksz, input, s0, s1, p0, p1, d0, d1, True)
    ow, oh, batch = _ggml(im2col, 1), _ggml(im2col, 2), _ggml(im2col, 3)
    out_channels = _ggml(ksz, 3)
    # ggml order [OW, OH, OC, N]; rows are ggml axis 1.
    return (oh, ow, out_channels, batch)


def conv_2d_sk_p0_output_shape(kernel: Iterable[int], input: Iterable[int]) -> Shape:
    """2D convolution with a stride equal to the kernel size and no padding."""
    ksz = full_shape(kernel)
    return conv_2d_output_shape(ksz, input, _ggml(ksz, 0), _ggml(ksz, 1), 0, 0, 1, 1)


def conv_2d_s1_ph_output_shape(kernel: Iterable[int], input: Iterable[int]) -> Shape:
    """2D convolution with stride 1 and half-kernel padding."""
    ksz = full_shape(kernel)
    return conv_2d_output_shape(
        ksz, input, 1, 1, _ggml(ksz, 0) // 2, _ggml(ksz, 1) // 2, 1, 1
    )


def conv_transpose_2d_p0_shape(
    kernel: Iterable[int], input: Iterable[int], stride: int
) -> Shape:
    """Shape of a transposed 2D convolution without padding."""
    ksz = full_shape(kernel)
    isz = full_shape(input)
    if _ggml(ksz, 3) != _ggml(isz, 2):
        raise ValueError(
            f"channel mismatch: kernel has {_ggml(ksz, 3)}, input has {_ggml(isz, 2)}"
        )
    return (
        conv_transpose_output_size(_ggml(isz, 1), _ggml(ksz, 1), stride, 0),
        conv_transpose_output_size(_ggml(isz, 0), _ggml(ksz, 0), stride, 0),
        _ggml(ksz, 2),
        _ggml(isz, 3),
    )