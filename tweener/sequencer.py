"""Frame sequencing across a chain of source images."""

import logging
from typing import Iterator, Optional, Sequence

import numpy as np

from .blender import ImageBlender
from .models import FrameImage, FrameRecipe, InconsistentImageSizesError


logger = logging.getLogger(__name__)


class FrameSequencer:
    """Maps global output frame indices to source pairs and blend fractions.

    For ``n`` source images and ``steps`` frames per segment the run has
    ``(n - 1) * steps + 1`` output frames. Frame ``k`` belongs to segment
    ``k // steps`` at fraction ``(k % steps) / steps``. Frames with a zero
    fraction are the source images themselves, so the first and last output
    frames are exactly the first and last inputs.

    Image sizes are not checked here; use ``validated()`` or check them once
    before building the sequencer.
    """

    def __init__(
        self,
        images: Sequence[FrameImage],
        steps: int,
        blender: Optional[ImageBlender] = None,
    ) -> None:
        """Initialize the sequencer.

        Args:
            images: Ordered source images, at least two, all the same size.
            steps: Frames per segment, at least one.
            blender: Blender used for in-between frames.

        Raises:
            ValueError: If there are fewer than two images or steps < 1.
        """
        if len(images) < 2:
            raise ValueError(f"At least two images are required, got {len(images)}")
        if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)) or steps < 1:
            raise ValueError(f"steps must be a positive integer, got {steps!r}")

        self._images = tuple(images)
        self._steps = int(steps)
        self.blender = blender or ImageBlender()

    @classmethod
    def validated(
        cls,
        images: Sequence[FrameImage],
        steps: int,
        blender: Optional[ImageBlender] = None,
    ) -> 'FrameSequencer':
        """Check that all images share one size, then build a sequencer.

        Raises:
            InconsistentImageSizesError: If any image differs from the first.
        """
        for i, image in enumerate(images[1:], start=1):
            if not image.same_size(images[0]):
                raise InconsistentImageSizesError(
                    f"Image {i} is {image.width}x{image.height}, "
                    f"expected {images[0].width}x{images[0].height}"
                )
        return cls(images, steps, blender)

    @property
    def images(self) -> tuple[FrameImage, ...]:
        return self._images

    @property
    def n_images(self) -> int:
        return len(self._images)

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def total_frames(self) -> int:
        return (self.n_images - 1) * self._steps + 1

    def recipe(self, index: int) -> FrameRecipe:
        """Return the recipe for a global frame index.

        Raises:
            IndexError: If index is outside [0, total_frames).
        """
        if not 0 <= index < self.total_frames:
            raise IndexError(f"Frame index {index} out of range 0..{self.total_frames - 1}")
        segment, local = divmod(index, self._steps)
        return FrameRecipe(index=index, segment=segment, local=local, steps=self._steps)

    def recipes(self) -> Iterator[FrameRecipe]:
        """Yield every recipe using the closed-form index mapping."""
        for index in range(self.total_frames):
            yield self.recipe(index)

    def cursor(self) -> 'SequenceCursor':
        """Return a forward-only cursor over the same recipes."""
        return SequenceCursor(self.n_images, self._steps)

    def render(self, recipe: FrameRecipe) -> FrameImage:
        """Produce the frame described by a recipe.

        Keyframes return the source image object itself.
        """
        if recipe.is_keyframe:
            return self._images[recipe.segment]

        logger.debug(
            "Blending frame %d: images %d->%d at %.4f",
            recipe.index, recipe.segment, recipe.segment + 1, recipe.fraction,
        )
        return self.blender.blend_images(
            recipe.fraction,
            self._images[recipe.segment],
            self._images[recipe.segment + 1],
        )

    def frame_at(self, index: int) -> FrameImage:
        return self.render(self.recipe(index))


class SequenceCursor:
    """Stateful forward-only walk over the frame recipes of a run.

    Keeps a ``(segment, local)`` cursor starting at ``(0, 0)``. When ``local``
    reaches ``steps`` the next segment's start frame is emitted, the cursor
    moves to that segment and ``local`` restarts at 1, since the segment's
    frame 0 has just been produced. Iteration ends once ``segment + 1`` runs
    past the last image.
    """

    def __init__(self, n_images: int, steps: int) -> None:
        self._n_images = n_images
        self._steps = steps
        self._segment = 0
        self._local = 0
        self._index = 0

    def __iter__(self) -> 'SequenceCursor':
        return self

    def __next__(self) -> FrameRecipe:
        if self._segment + 1 >= self._n_images:
            raise StopIteration

        if self._local == self._steps:
            self._segment += 1
            self._local = 1
            recipe = FrameRecipe(self._index, self._segment, 0, self._steps)
        else:
            recipe = FrameRecipe(self._index, self._segment, self._local, self._steps)
            self._local += 1

        self._index += 1
        return recipe
