"""PNG decoding and encoding for Image Tweener."""

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from config import FRAME_NAME_TEMPLATE, PNG_COMPRESS_LEVEL
from .models import DecodeError, EncodeError, FrameImage


logger = logging.getLogger(__name__)


def frame_filename(index: int) -> str:
    """Return the output file name for a global frame index."""
    return FRAME_NAME_TEMPLATE.format(index=index)


def load_image(path: Path) -> FrameImage:
    """Decode an image file into a FrameImage.

    The image is converted to packed 8-bit RGB; any alpha channel is dropped.

    Args:
        path: Image file to read.

    Returns:
        The decoded FrameImage.

    Raises:
        DecodeError: If the file cannot be opened or decoded.
    """
    path = Path(path)
    try:
        img = Image.open(path)
    except FileNotFoundError as e:
        raise DecodeError(path, 'open', "Image file not found") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(path, 'open', f"Image too large to decode safely: {e}") from e
    except UnidentifiedImageError as e:
        raise DecodeError(path, 'open', "Unrecognized image format") from e
    except OSError as e:
        raise DecodeError(path, 'open', f"Failed to open image file: {e}") from e

    with img:
        try:
            img.load()
            if img.mode != 'RGB':
                img = img.convert('RGB')
            arr = np.asarray(img, dtype=np.uint8)
        except Image.DecompressionBombError as e:
            raise DecodeError(path, 'decode', f"Image too large to decode safely: {e}") from e
        except (OSError, EOFError, ValueError, SyntaxError) as e:
            raise DecodeError(path, 'decode', f"Failed to decode image data: {e}") from e

    image = FrameImage.from_array(arr)
    logger.debug("Loaded %s (%dx%d)", path, image.width, image.height)
    return image


def save_image(image: FrameImage, path: Path) -> Path:
    """Encode a FrameImage as an 8-bit RGB PNG.

    Raises:
        EncodeError: If the file cannot be created or written.
    """
    path = Path(path)
    try:
        Image.fromarray(np.array(image.as_array())).save(
            path, format='PNG', compress_level=PNG_COMPRESS_LEVEL
        )
    except (OSError, ValueError) as e:
        raise EncodeError(path, 'encode', f"Failed to write image file: {e}") from e
    return path
