"""Pixel and image blending for Image Tweener."""

import math

import numpy as np

from .models import (
    ChannelRounding,
    FrameImage,
    InconsistentImageSizesError,
    Pixel,
)


class ImageBlender:
    """Linear blending of RGB pixels and whole images.

    Channels are mixed in float64 as ``a * (1 - fraction) + b * fraction``
    and converted back to 8 bits according to ``rounding``. The default,
    truncation toward zero, reproduces earlier output bit-for-bit.
    """

    def __init__(self, rounding: ChannelRounding = ChannelRounding.TRUNCATE) -> None:
        """Initialize the blender.

        Args:
            rounding: How blended channel values are converted to uint8.
        """
        self.rounding = rounding

    @staticmethod
    def check_fraction(fraction: float) -> float:
        """Validate a blend fraction.

        Raises:
            ValueError: If fraction is NaN or outside [0.0, 1.0].
        """
        fraction = float(fraction)
        if math.isnan(fraction) or not 0.0 <= fraction <= 1.0:
            raise ValueError(f"Blend fraction must be in [0.0, 1.0], got {fraction}")
        return fraction

    def mix(self, fraction: float, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Blend two uint8 channel arrays of the same shape.

        Args:
            fraction: 0.0 (100% a) to 1.0 (100% b).
            a: Start channels.
            b: End channels.

        Returns:
            New uint8 array with the blended channels.
        """
        t2 = self.check_fraction(fraction)
        t1 = 1.0 - t2

        mixed = a.astype(np.float64) * t1 + b.astype(np.float64) * t2
        if self.rounding == ChannelRounding.NEAREST:
            mixed = np.floor(mixed + 0.5)

        # casting float -> uint8 truncates toward zero; clip first so it saturates
        return np.clip(mixed, 0, 255).astype(np.uint8)

    def blend_pixel(self, fraction: float, a: Pixel, b: Pixel) -> Pixel:
        """Blend two pixels channel by channel."""
        out = self.mix(
            fraction,
            np.array(a.as_tuple(), dtype=np.uint8),
            np.array(b.as_tuple(), dtype=np.uint8),
        )
        return Pixel(int(out[0]), int(out[1]), int(out[2]))

    def blend_images(self, fraction: float, img_a: FrameImage, img_b: FrameImage) -> FrameImage:
        """Blend two same-sized images into a new one.

        Raises:
            InconsistentImageSizesError: If the images differ in size.
        """
        if not img_a.same_size(img_b):
            raise InconsistentImageSizesError(
                f"Cannot blend {img_a.width}x{img_a.height} with {img_b.width}x{img_b.height}"
            )
        return FrameImage(self.mix(fraction, img_a.data, img_b.data), img_a.width, img_a.height)
