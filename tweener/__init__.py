"""Core modules for Image Tweener."""

from .models import (
    ChannelRounding,
    ExecutionMode,
    Pixel,
    FrameImage,
    FrameRecipe,
    FrameResult,
    TweenError,
    DimensionMismatchError,
    InconsistentImageSizesError,
    ImageIOError,
    DecodeError,
    EncodeError,
    DestinationError,
    OutputDirectoryExistsError,
)
from .blender import ImageBlender
from .sequencer import FrameSequencer, SequenceCursor
from .drivers import SequentialDriver, ParallelDriver, create_driver
from .image_io import load_image, save_image, frame_filename
from .manager import TweenManager

__all__ = [
    'ChannelRounding',
    'ExecutionMode',
    'Pixel',
    'FrameImage',
    'FrameRecipe',
    'FrameResult',
    'TweenError',
    'DimensionMismatchError',
    'InconsistentImageSizesError',
    'ImageIOError',
    'DecodeError',
    'EncodeError',
    'DestinationError',
    'OutputDirectoryExistsError',
    'ImageBlender',
    'FrameSequencer',
    'SequenceCursor',
    'SequentialDriver',
    'ParallelDriver',
    'create_driver',
    'load_image',
    'save_image',
    'frame_filename',
    'TweenManager',
]
