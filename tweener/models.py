"""Data models, enums, and exceptions for Image Tweener."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Union

import numpy as np


MAX_DIMENSION = 0xFFFFFFFF  # u32
CHANNELS = 3


# --- Exceptions ---

class TweenError(Exception):
    """Base exception for interpolation runs."""


class DimensionMismatchError(TweenError):
    """Pixel buffer length disagrees with width * height."""


class InconsistentImageSizesError(TweenError):
    """Source images do not all share one width and height."""


class ImageIOError(TweenError):
    """Error reading or writing an image file.

    Attributes:
        path: The file being read or written.
        stage: The step that failed ('open', 'decode', 'encode').
    """

    def __init__(self, path: Union[str, Path], stage: str, message: str) -> None:
        self.path = Path(path)
        self.stage = stage
        super().__init__(f"{message} [{stage}: {self.path}]")


class DecodeError(ImageIOError):
    """An input image could not be opened or decoded."""


class EncodeError(ImageIOError):
    """An output frame could not be encoded or written."""


class DestinationError(TweenError):
    """Error with the output directory."""


class OutputDirectoryExistsError(DestinationError):
    """Output directory already exists and would be overwritten."""


# --- Enums ---

class ExecutionMode(Enum):
    """How output frames are computed."""
    PARALLEL = 'parallel'      # independent frame indices on a thread pool
    SEQUENTIAL = 'sequential'  # single forward-only cursor


class ChannelRounding(Enum):
    """How blended float channels are converted back to 8 bits."""
    TRUNCATE = 'truncate'  # toward zero, matches prior output bit-for-bit
    NEAREST = 'nearest'    # round half up


# --- Data Classes ---

@dataclass(frozen=True)
class Pixel:
    """A single RGB pixel with 8-bit channels."""
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ('r', 'g', 'b'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"Channel {name} must be an integer, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} out of range 0-255: {value}")
            object.__setattr__(self, name, int(value))

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


def _check_dimension(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not 0 < value <= MAX_DIMENSION:
        raise ValueError(f"{name} must be in 1..{MAX_DIMENSION}, got {value}")
    return int(value)


def _pixel_buffer(data) -> np.ndarray:
    """Copy data into a read-only (N, 3) uint8 array."""
    if not isinstance(data, np.ndarray):
        data = [p.as_tuple() if isinstance(p, Pixel) else p for p in data]
    arr = np.asarray(data)
    if arr.size == 0:
        arr = np.empty((0, CHANNELS), dtype=np.uint8)

    if arr.ndim != 2 or arr.shape[1] != CHANNELS:
        raise DimensionMismatchError(
            f"Pixel data must have shape (N, {CHANNELS}), got {arr.shape}"
        )

    if arr.dtype != np.uint8:
        if not np.issubdtype(arr.dtype, np.integer):
            raise ValueError(f"Pixel data must be 8-bit unsigned integers, got {arr.dtype}")
        if arr.size and (arr.min() < 0 or arr.max() > 255):
            raise ValueError("Pixel channel values must be in range 0-255")

    buf = np.array(arr, dtype=np.uint8)
    buf.flags.writeable = False
    return buf


@dataclass(frozen=True, eq=False)
class FrameImage:
    """An RGB image: a flat pixel buffer plus its width and height.

    The buffer is stored as a read-only (width * height, 3) uint8 array in
    row-major order. Instances are never modified; blending and decoding
    always produce new ones.

    Raises:
        ValueError: If width or height is not a positive u32, or the
            channel values are not 8-bit unsigned integers.
        DimensionMismatchError: If the pixel count is not width * height.
    """
    data: np.ndarray
    width: int
    height: int

    def __post_init__(self) -> None:
        width = _check_dimension('width', self.width)
        height = _check_dimension('height', self.height)
        buf = _pixel_buffer(self.data)

        if len(buf) != width * height:
            raise DimensionMismatchError(
                f"Data must match the dimensions given in width and height: "
                f"got {len(buf)} pixels for {width}x{height}"
            )

        object.__setattr__(self, 'data', buf)
        object.__setattr__(self, 'width', width)
        object.__setattr__(self, 'height', height)

    @classmethod
    def from_pixels(
        cls,
        pixels: Iterable[Union[Pixel, tuple[int, int, int]]],
        width: int,
        height: int,
    ) -> 'FrameImage':
        """Build an image from Pixel objects or RGB triples."""
        return cls(list(pixels), width, height)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'FrameImage':
        """Build an image from an (H, W, 3) array."""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise DimensionMismatchError(
                f"Image array must have shape (H, W, {CHANNELS}), got {arr.shape}"
            )
        height, width = arr.shape[:2]
        return cls(arr.reshape(-1, CHANNELS), width, height)

    @classmethod
    def solid(cls, pixel: Pixel, width: int, height: int) -> 'FrameImage':
        """Build an image filled with a single color."""
        width = _check_dimension('width', width)
        height = _check_dimension('height', height)
        data = np.tile(np.array(pixel.as_tuple(), dtype=np.uint8), (width * height, 1))
        return cls(data, width, height)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def same_size(self, other: 'FrameImage') -> bool:
        return self.size == other.size

    def as_array(self) -> np.ndarray:
        """Return a read-only (H, W, 3) view of the pixels."""
        return self.data.reshape(self.height, self.width, CHANNELS)

    def pixel(self, x: int, y: int) -> Pixel:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        r, g, b = self.data[y * self.width + x]
        return Pixel(int(r), int(g), int(b))

    def pixels(self) -> Iterator[Pixel]:
        for r, g, b in self.data.tolist():
            yield Pixel(r, g, b)

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrameImage):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.data, other.data)

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.data.tobytes()))

    def __repr__(self) -> str:
        return f"FrameImage(width={self.width}, height={self.height})"


@dataclass(frozen=True)
class FrameRecipe:
    """How to produce one output frame.

    Attributes:
        index: Global output frame index.
        segment: Index of the source image starting the segment.
        local: Position within the segment, 0 to steps - 1.
        steps: Frames per segment.
    """
    index: int
    segment: int
    local: int
    steps: int

    @property
    def fraction(self) -> float:
        return self.local / self.steps

    @property
    def is_keyframe(self) -> bool:
        return self.local == 0


@dataclass
class FrameResult:
    """Result of writing one output frame."""
    index: int
    output_path: Path
    segment: int
    fraction: float
