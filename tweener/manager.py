"""Run orchestration for Image Tweener."""

import logging
from pathlib import Path
from typing import Callable, Optional

from config import SUPPORTED_EXTENSIONS
from .blender import ImageBlender
from .drivers import create_driver
from .image_io import frame_filename, load_image, save_image
from .models import (
    DecodeError,
    DestinationError,
    ExecutionMode,
    FrameImage,
    FrameResult,
    InconsistentImageSizesError,
    OutputDirectoryExistsError,
)
from .sequencer import FrameSequencer


logger = logging.getLogger(__name__)


class TweenManager:
    """Loads source images, interpolates them and writes numbered frames."""

    def __init__(self, blender: Optional[ImageBlender] = None) -> None:
        """Initialize the manager.

        Args:
            blender: Blender used for in-between frames.
        """
        self.blender = blender or ImageBlender()

    @staticmethod
    def validate_paths(sources: list[Path], outdir: Path) -> None:
        """Validate source files and the output directory.

        Args:
            sources: Ordered source image files.
            outdir: Output directory; must not exist yet.

        Raises:
            ValueError: If fewer than two sources are given.
            DecodeError: If a source is missing or not a supported file type.
            OutputDirectoryExistsError: If outdir already exists.
        """
        if len(sources) < 2:
            raise ValueError(f"At least two source images are required, got {len(sources)}")

        for source in sources:
            if not source.exists():
                raise DecodeError(source, 'open', "Image file not found")
            if not source.is_file():
                raise DecodeError(source, 'open', "Source is not a file")
            if source.suffix.lower() not in SUPPORTED_EXTENSIONS:
                raise DecodeError(source, 'open', "Unsupported image file type")

        if outdir.exists():
            raise OutputDirectoryExistsError(f"Output directory already exists: {outdir}")

    @staticmethod
    def load_images(sources: list[Path]) -> list[FrameImage]:
        """Decode every source image, failing on the first error."""
        images = [load_image(source) for source in sources]
        logger.info("Loaded %d source images", len(images))
        return images

    @staticmethod
    def check_sizes(images: list[FrameImage], sources: list[Path]) -> None:
        """Ensure all images share the first image's width and height.

        Raises:
            InconsistentImageSizesError: Naming the first offending file.
        """
        first = images[0]
        for image, source in zip(images[1:], sources[1:]):
            if not image.same_size(first):
                raise InconsistentImageSizesError(
                    f"All of the images must have the same width and height: "
                    f"{source} is {image.width}x{image.height}, "
                    f"{sources[0]} is {first.width}x{first.height}"
                )

    @staticmethod
    def create_output_dir(outdir: Path) -> None:
        """Create a fresh output directory.

        Raises:
            OutputDirectoryExistsError: If outdir already exists.
            DestinationError: If outdir cannot be created.
        """
        try:
            outdir.mkdir(parents=True, exist_ok=False)
        except FileExistsError as e:
            raise OutputDirectoryExistsError(f"Output directory already exists: {outdir}") from e
        except OSError as e:
            raise DestinationError(f"Failed to create the output directory {outdir}: {e}") from e
        logger.info("Created output directory %s", outdir)

    def render_sequence(
        self,
        sources: list[Path],
        outdir: Path,
        steps: int,
        mode: ExecutionMode = ExecutionMode.PARALLEL,
        max_workers: Optional[int] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> list[FrameResult]:
        """Interpolate between source images and write every frame.

        Args:
            sources: Ordered source image files.
            outdir: Output directory, created by this call.
            steps: Frames per segment.
            mode: Parallel or sequential execution.
            max_workers: Thread count for parallel execution.
            progress_callback: Optional callback(done, total).

        Returns:
            FrameResult for each written file, in frame order.
        """
        self.validate_paths(sources, outdir)
        images = self.load_images(sources)
        self.check_sizes(images, sources)

        sequencer = FrameSequencer(images, steps, self.blender)
        self.create_output_dir(outdir)

        def write_frame(index: int, frame: FrameImage) -> FrameResult:
            recipe = sequencer.recipe(index)
            output_path = save_image(frame, outdir / frame_filename(index))
            return FrameResult(
                index=index,
                output_path=output_path,
                segment=recipe.segment,
                fraction=recipe.fraction,
            )

        driver = create_driver(mode, sequencer, max_workers)
        results = driver.run(write_frame, progress_callback)

        logger.info(
            "Wrote %d frames (%d images, %d steps) to %s",
            len(results), len(images), steps, outdir,
        )
        return results
