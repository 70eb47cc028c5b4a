#!/usr/bin/env python3
"""Image Tweener - Generate in-between frames for a chain of images.

Linearly interpolates the RGB channels of two or more equally sized PNG
images and writes every frame as a numbered PNG, ready to be assembled into
an animation.
"""

# --- Imports ---
import argparse
import sys
from pathlib import Path
from typing import Optional

from config import DEFAULT_N_FRAMES, DEFAULT_OUTDIR, setup_logging
from tweener import (
    ChannelRounding,
    ExecutionMode,
    ImageBlender,
    TweenError,
    TweenManager,
)


# --- CLI ---
def positive_int(value: str) -> int:
    """argparse type for integers >= 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='tween',
        description='Image Tweener - Generate in-between frames for a chain of images.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s a.png b.png                  50 frames per pair into ./frames
  %(prog)s a.png b.png c.png -n 10 -o out
                                        10 frames per pair into ./out
  %(prog)s a.png b.png --mode sequential
                                        Compute frames one at a time
        """
    )

    parser.add_argument(
        'images',
        nargs='+',
        type=Path,
        metavar='IMAGE',
        help='The images to interpolate between, in order (at least two)'
    )

    parser.add_argument(
        '-o', '--outdir',
        type=Path,
        default=Path(DEFAULT_OUTDIR),
        metavar='PATH',
        help='The directory to save the frames to; must not exist (default: %(default)s)'
    )

    parser.add_argument(
        '-n', '--n-frames',
        type=positive_int,
        default=DEFAULT_N_FRAMES,
        metavar='N',
        help='The number of frames between each pair of images (default: %(default)s)'
    )

    parser.add_argument(
        '--mode',
        choices=[m.value for m in ExecutionMode],
        default=ExecutionMode.PARALLEL.value,
        help='Compute frames on a thread pool or one at a time (default: %(default)s)'
    )

    parser.add_argument(
        '-j', '--workers',
        type=positive_int,
        metavar='N',
        help='Worker threads for parallel mode (default: CPU count)'
    )

    parser.add_argument(
        '--rounding',
        choices=[r.value for r in ChannelRounding],
        default=ChannelRounding.TRUNCATE.value,
        help='How blended channels are converted to 8 bits (default: %(default)s)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log progress details'
    )

    return parser


def run_cli(args: argparse.Namespace) -> int:
    """Execute an interpolation run.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    manager = TweenManager(ImageBlender(ChannelRounding(args.rounding)))

    try:
        results = manager.render_sequence(
            sources=list(args.images),
            outdir=args.outdir,
            steps=args.n_frames,
            mode=ExecutionMode(args.mode),
            max_workers=args.workers,
        )
    except (TweenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {len(results)} frames from {len(args.images)} images to {args.outdir}")
    return 0


# --- Entry Point ---
def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the application.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if len(args.images) < 2:
        parser.error('at least two images are required')

    setup_logging('DEBUG' if args.verbose else None)
    return run_cli(args)


if __name__ == '__main__':
    sys.exit(main())
