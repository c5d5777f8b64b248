"""Quadtree image compression with optional search for a target compression ratio."""

from __future__ import annotations

import io
import logging
import os
from collections import deque
from dataclasses import dataclass
from enum import IntEnum

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

_SEARCH_ITERATIONS = 20
_RATIO_TOLERANCE = 0.005
_LOWER_BOUND_STEP = 0.000001


class ErrorMethod(IntEnum):
    """How the error of a block is measured."""

    VARIANCE = 1
    MEAN_ABSOLUTE_DEVIATION = 2
    MAX_PIXEL_DIFFERENCE = 3
    ENTROPY = 4

    def max_threshold(self) -> float:
        """Upper bound of the threshold used when searching for a compression ratio."""
        return _MAX_THRESHOLDS[self]


_MAX_THRESHOLDS = {
    ErrorMethod.VARIANCE: 10000.0,
    ErrorMethod.MEAN_ABSOLUTE_DEVIATION: 255.0,
    ErrorMethod.MAX_PIXEL_DIFFERENCE: 765.0,
    ErrorMethod.ENTROPY: 24.0,
}


@dataclass(frozen=True)
class Node:
    """A block of the image visited by the quadtree."""

    x: int
    y: int
    width: int
    height: int
    depth: int


@dataclass(frozen=True)
class TreeStats:
    """Shape of the quadtree built during compression."""

    depth: int
    vertices: int


@dataclass
class CompressionResult:
    """A compressed image together with the statistics of its quadtree."""

    image: np.ndarray
    stats: TreeStats


def _check_image(image: np.ndarray) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError("image must be an array of shape (height, width, 3)")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError("image must not be empty")


def _block(image: np.ndarray, x: int, y: int, width: int, height: int) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("block must have a positive width and height")
    return image[y : y + height, x : x + width].reshape(-1, 3).astype(np.int64)


def average_color(
    image: np.ndarray, x: int, y: int, width: int, height: int
) -> tuple[int, int, int]:
    """Mean colour of a block, each channel truncated to an integer."""
    sums = _block(image, x, y, width, height).sum(axis=0)
    total = width * height
    return tuple(int(s) // total for s in sums)  # type: ignore[return-value]


def _entropy(channel: np.ndarray, total: int) -> float:
    counts = np.bincount(channel, minlength=256)
    counts = counts[counts > 0]
    p = counts / total
    # Every pixel contributes -p*log2(p) for the frequency of its own value.
    return float((counts * (-p * np.log2(p))).sum())


def is_uniform(
    image: np.ndarray,
    x: int,
    y: int,
    width: int,
    height: int,
    method: ErrorMethod | int,
    threshold: float,
    average: tuple[int, int, int],
) -> bool:
    """Whether the block's error under ``method`` stays below ``threshold``."""
    method = ErrorMethod(method)
    block = _block(image, x, y, width, height)
    total = width * height
    avg = np.asarray(average, dtype=np.int64)

    if method is ErrorMethod.VARIANCE:
        error: float = int(((block - avg) ** 2).sum()) // (3 * total)
    elif method is ErrorMethod.MEAN_ABSOLUTE_DEVIATION:
        error = int(np.abs(block - avg).sum()) // (3 * total)
    elif method is ErrorMethod.MAX_PIXEL_DIFFERENCE:
        error = int((block.max(axis=0) - block.min(axis=0)).sum()) // 3
    else:
        error = sum(_entropy(block[:, c], total) for c in range(3)) / 3

    return error < threshold


def quadtree(
    image: np.ndarray,
    method: ErrorMethod | int,
    threshold: float,
    min_block_size: int,
) -> CompressionResult:
    """Flatten every non-uniform-enough region of ``image`` by breadth-first splitting."""
    _check_image(image)
    method = ErrorMethod(method)
    result = image.copy()
    height, width = result.shape[:2]

    depth = 0
    vertices = 0
    queue: deque[Node] = deque([Node(0, 0, width, height, 0)])
    while queue:
        node = queue.popleft()
        average = average_color(result, node.x, node.y, node.width, node.height)
        vertices += 1
        depth = max(depth, node.depth)

        half_w = node.width // 2
        half_h = node.height // 2
        if half_w * half_h >= min_block_size and not is_uniform(
            result, node.x, node.y, node.width, node.height, method, threshold, average
        ):
            rest_w = node.width - half_w
            rest_h = node.height - half_h
            child = node.depth + 1
            queue.append(Node(node.x, node.y, half_w, half_h, child))
            queue.append(Node(node.x + half_w, node.y, rest_w, half_h, child))
            queue.append(Node(node.x, node.y + half_h, half_w, rest_h, child))
            queue.append(Node(node.x + half_w, node.y + half_h, rest_w, rest_h, child))
        else:
            result[node.y : node.y + node.height, node.x : node.x + node.width] = average

    return CompressionResult(image=result, stats=TreeStats(depth=depth, vertices=vertices))


def encoded_size(image: np.ndarray, suffix: str) -> int:
    """Number of bytes ``image`` takes when encoded in the format of ``suffix``."""
    _check_image(image)
    extension = suffix if suffix.startswith(".") else f".{suffix}"
    image_format = Image.registered_extensions().get(extension.lower())
    if image_format is None:
        raise ValueError(f"unknown image format: {suffix}")
    buffer = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(buffer, format=image_format)
    return buffer.tell()


def compress_image(
    image: np.ndarray,
    address: str | os.PathLike[str],
    method: ErrorMethod | int,
    threshold: float,
    min_block_size: int,
    compression_percentage: float,
) -> CompressionResult:
    """Compress ``image``; a non-zero percentage searches for a threshold reaching it.

    ``address`` is the file the image was read from; its size is the reference
    for the compression ratio.
    """
    _check_image(image)
    method = ErrorMethod(method)

    if compression_percentage == 0:
        return quadtree(image, method, threshold, min_block_size)

    original_size = os.path.getsize(address)
    low, high = 0.0, method.max_threshold()
    best_image = image.copy()
    best_distance = 1.0
    current: CompressionResult | None = None

    iteration = 0
    while low < high and iteration < _SEARCH_ITERATIONS:
        mid = (low + high) / 2.0
        current = quadtree(image, method, mid, min_block_size)
        ratio = 1.0 - encoded_size(current.image, ".png") / original_size
        logger.info(
            "compression %d with threshold %g: %g%%", iteration + 1, mid, ratio * 100
        )

        distance = abs(ratio - compression_percentage)
        if -_RATIO_TOLERANCE < ratio - compression_percentage < _RATIO_TOLERANCE:
            break
        if ratio < compression_percentage:
            low = mid + _LOWER_BOUND_STEP
        else:
            high = mid

        if distance < best_distance:
            best_distance = distance
            best_image = current.image.copy()

        iteration += 1

    assert current is not None
    # Statistics always describe the last tree that was built.
    if iteration != _SEARCH_ITERATIONS:
        return current
    return CompressionResult(image=best_image, stats=current.stats)