"""Partitioning of a sample sequence into transform blocks."""
from __future__ import annotations
from wavspectrum.types import Block


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def largest_power_of_4(r: int) -> int:
    """Return the largest power of 4 that is <= r (1 when r < 4)."""
    p = 1
    while p * 4 <= r:
        p *= 4
    return p


def segment(n: int, window_size: int) -> list[Block]:
    """
    Split [0, n) into disjoint transform blocks.

    Full blocks of window_size come first. A non-zero remainder r gets one
    tail block sized to the largest power of 4 <= r; the last
    r - largest_power_of_4(r) samples are left out.

    Args:
        n: Number of samples
        window_size: Nominal block length (positive power of two)

    Returns:
        Blocks in increasing start order
    """
    if n < 0:
        raise ValueError("Sample count must be non-negative.")
    if not is_power_of_two(window_size):
        raise ValueError(f"window_size must be a positive power of two, got {window_size}.")

    full = n // window_size
    blocks = [Block(i * window_size, (i + 1) * window_size) for i in range(full)]

    r = n % window_size
    if r > 0:
        start = n - r
        blocks.append(Block(start, start + largest_power_of_4(r)))
    return blocks
