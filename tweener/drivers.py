"""Execution strategies for computing the frames of a run."""

import logging
import os
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Iterator, Optional, TypeVar

from .models import ExecutionMode, FrameImage
from .sequencer import FrameSequencer


logger = logging.getLogger(__name__)

T = TypeVar('T')

FrameSink = Callable[[int, FrameImage], T]
ProgressCallback = Callable[[int, int], None]


class SequentialDriver:
    """Computes frames one at a time with the sequencer's forward cursor."""

    def __init__(self, sequencer: FrameSequencer) -> None:
        self.sequencer = sequencer

    def frames(self) -> Iterator[tuple[int, FrameImage]]:
        """Yield (index, frame) pairs in index order."""
        for recipe in self.sequencer.cursor():
            yield recipe.index, self.sequencer.render(recipe)

    def run(
        self,
        sink: FrameSink,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> list:
        """Pass every frame to sink.

        Args:
            sink: Called with (index, frame); its return values are collected.
            progress_callback: Optional callback(done, total).

        Returns:
            The sink results ordered by frame index.
        """
        total = self.sequencer.total_frames
        results = []
        for index, frame in self.frames():
            results.append(sink(index, frame))
            if progress_callback:
                progress_callback(len(results), total)
        return results


class ParallelDriver:
    """Computes frame indices independently on a thread pool.

    Every task resolves its own recipe from the frame index and only reads
    the sequencer's shared source images. At most ``2 * max_workers`` tasks
    are in flight at once.
    """

    def __init__(self, sequencer: FrameSequencer, max_workers: Optional[int] = None) -> None:
        """Initialize the driver.

        Args:
            sequencer: The run to compute.
            max_workers: Thread count. Defaults to the CPU count.

        Raises:
            ValueError: If max_workers is less than 1.
        """
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.sequencer = sequencer
        self.max_workers = max_workers or os.cpu_count() or 1

    def _execute(
        self,
        task: Callable[[int], T],
        ordered: bool,
    ) -> Iterator[tuple[int, T]]:
        """Run task over every frame index, yielding (index, result).

        The first task error cancels everything still pending and is
        re-raised.
        """
        indices = iter(range(self.sequencer.total_frames))
        window = 2 * self.max_workers

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            pending: deque[tuple[int, Future]] = deque()

            def submit_next() -> None:
                index = next(indices, None)
                if index is not None:
                    pending.append((index, executor.submit(task, index)))

            try:
                for _ in range(window):
                    submit_next()

                while pending:
                    if ordered:
                        index, future = pending.popleft()
                        result = future.result()
                    else:
                        wait([f for _, f in pending], return_when=FIRST_COMPLETED)
                        position = next(i for i, (_, f) in enumerate(pending) if f.done())
                        index, future = pending[position]
                        del pending[position]
                        result = future.result()
                    submit_next()
                    yield index, result
            finally:
                for _, future in pending:
                    future.cancel()

    def frames(self, ordered: bool = True) -> Iterator[tuple[int, FrameImage]]:
        """Yield (index, frame) pairs.

        Args:
            ordered: Yield in index order; otherwise in completion order.
        """
        yield from self._execute(self.sequencer.frame_at, ordered)

    def run(
        self,
        sink: FrameSink,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> list:
        """Pass every frame to sink inside the worker threads.

        Args:
            sink: Called with (index, frame) on a worker thread.
            progress_callback: Optional callback(done, total), called on the
                calling thread.

        Returns:
            The sink results ordered by frame index.
        """
        total = self.sequencer.total_frames
        results: list = [None] * total

        def task(index: int):
            return sink(index, self.sequencer.frame_at(index))

        done = 0
        for index, result in self._execute(task, ordered=False):
            results[index] = result
            done += 1
            if progress_callback:
                progress_callback(done, total)

        logger.debug("Computed %d frames on %d threads", total, self.max_workers)
        return results


def create_driver(
    mode: ExecutionMode,
    sequencer: FrameSequencer,
    max_workers: Optional[int] = None,
):
    """Build the driver for an execution mode."""
    if mode == ExecutionMode.SEQUENTIAL:
        return SequentialDriver(sequencer)
    return ParallelDriver(sequencer, max_workers)
