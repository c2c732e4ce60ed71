"""In-place radix-2 complex FFT over split real/imaginary float32 arrays."""
from __future__ import annotations
from functools import lru_cache
import numpy as np
from wavspectrum.dsp.segment import is_power_of_two
from wavspectrum.errors import InvalidLengthError
from wavspectrum.types import DEFAULT_WINDOW_SIZE

SCRATCH_FACTOR = 4
DEFAULT_SCRATCH_CAPACITY = SCRATCH_FACTOR * DEFAULT_WINDOW_SIZE


class ScratchBuffer:
    """
    Reusable float32 workspace for :func:`transform`.

    Contents are overwritten by every call and carry no meaning between
    calls. A buffer of capacity C serves transforms of length up to C / 4.
    """

    def __init__(self, capacity: int = DEFAULT_SCRATCH_CAPACITY):
        if capacity <= 0:
            raise ValueError("Scratch capacity must be positive.")
        self.data = np.zeros(int(capacity), dtype=np.float32)

    @property
    def capacity(self) -> int:
        return int(self.data.size)

    @property
    def max_length(self) -> int:
        return self.capacity // SCRATCH_FACTOR

    @classmethod
    def for_window(cls, window_size: int) -> "ScratchBuffer":
        """Allocate a buffer large enough for blocks of window_size."""
        return cls(max(DEFAULT_SCRATCH_CAPACITY, SCRATCH_FACTOR * int(window_size)))


@lru_cache(maxsize=32)
def bit_reverse_indices(length: int) -> np.ndarray:
    """Return the bit-reversal permutation of range(length) (read-only)."""
    if not is_power_of_two(length):
        raise InvalidLengthError(f"Transform length must be a power of two, got {length}.")
    bits = length.bit_length() - 1
    idx = np.arange(length, dtype=np.int64)
    rev = np.zeros(length, dtype=np.int64)
    for b in range(bits):
        rev |= ((idx >> b) & 1) << (bits - 1 - b)
    rev.setflags(write=False)
    return rev


@lru_cache(maxsize=32)
def _twiddle_table(length: int) -> tuple[np.ndarray, np.ndarray]:
    # exp(-2*pi*i*k/length) for k < length/2; stage m reads every (length/m)-th entry
    k = np.arange(length // 2, dtype=np.float64)
    angle = -2.0 * np.pi * k / length
    cos_t = np.cos(angle).astype(np.float32)
    sin_t = np.sin(angle).astype(np.float32)
    cos_t.setflags(write=False)
    sin_t.setflags(write=False)
    return cos_t, sin_t


def _check_args(real: np.ndarray, imag: np.ndarray, length: int, scratch: ScratchBuffer) -> None:
    if not is_power_of_two(length):
        raise InvalidLengthError(f"Transform length must be a power of two, got {length}.")
    if SCRATCH_FACTOR * length > scratch.capacity:
        raise InvalidLengthError(
            f"Transform length {length} needs {SCRATCH_FACTOR * length} scratch slots, "
            f"buffer holds {scratch.capacity} (max length {scratch.max_length})."
        )
    for name, a in (("real", real), ("imag", imag)):
        if a.shape != (length,):
            raise InvalidLengthError(
                f"{name} must have shape ({length},), got {a.shape}."
            )
        if a.dtype != np.float32:
            raise TypeError(f"{name} must be float32, got {a.dtype}.")
        if not a.flags.c_contiguous:
            raise ValueError(f"{name} must be a contiguous array view.")


def transform(real: np.ndarray, imag: np.ndarray, length: int, scratch: ScratchBuffer) -> None:
    """
    Forward, unnormalized DFT of real + i*imag, computed in place.

    Radix-2 decimation in time: a bit-reversal reorder followed by
    log2(length) butterfly stages. Intermediate twiddles and products live in
    ``scratch``; nothing outside ``real[:length]`` and ``imag[:length]`` is
    written.

    Args:
        real: Real parts, float32, exactly length elements
        imag: Imaginary parts, float32, exactly length elements
        length: Transform length (power of two)
        scratch: Workspace with capacity >= 4 * length

    Raises:
        InvalidLengthError: length is not a power of two, does not match the
            arrays, or exceeds the scratch capacity
    """
    _check_args(real, imag, length, scratch)
    if length == 1:
        return

    buf = scratch.data
    half_n = length // 2

    perm = bit_reverse_indices(int(length))
    staged = buf[:length]
    np.take(real, perm, out=staged)
    real[:] = staged
    np.take(imag, perm, out=staged)
    imag[:] = staged

    # scratch layout: [t_re | t_im | w_re | w_im | product]
    t_re_buf = buf[0:half_n]
    t_im_buf = buf[half_n:length]
    w_re_buf = buf[length:length + half_n]
    w_im_buf = buf[length + half_n:2 * length]
    prod_buf = buf[2 * length:2 * length + half_n]

    cos_t, sin_t = _twiddle_table(int(length))

    m = 2
    while m <= length:
        half = m // 2
        groups = length // m
        stride = length // m

        w_re = w_re_buf[:half]
        w_im = w_im_buf[:half]
        np.copyto(w_re, cos_t[::stride])
        np.copyto(w_im, sin_t[::stride])

        re = real.reshape(groups, m)
        im = imag.reshape(groups, m)
        top_re, bot_re = re[:, :half], re[:, half:]
        top_im, bot_im = im[:, :half], im[:, half:]

        t_re = t_re_buf.reshape(groups, half)
        t_im = t_im_buf.reshape(groups, half)
        prod = prod_buf.reshape(groups, half)

        # t = w * bottom
        np.multiply(bot_re, w_re, out=t_re)
        np.multiply(bot_im, w_im, out=prod)
        np.subtract(t_re, prod, out=t_re)
        np.multiply(bot_im, w_re, out=t_im)
        np.multiply(bot_re, w_im, out=prod)
        np.add(t_im, prod, out=t_im)

        # bottom = top - t, top = top + t
        np.subtract(top_re, t_re, out=bot_re)
        np.add(top_re, t_re, out=top_re)
        np.subtract(top_im, t_im, out=bot_im)
        np.add(top_im, t_im, out=top_im)

        m *= 2
