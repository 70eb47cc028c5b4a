"""Unit tests for frame sequencing."""

import numpy as np
import pytest

from tweener.models import FrameImage, InconsistentImageSizesError, Pixel
from tweener.sequencer import FrameSequencer, SequenceCursor


def solid(value, width=2, height=2):
    return FrameImage.solid(Pixel(value, value, value), width, height)


class TestFrameSequencerSetup:
    """Test FrameSequencer construction."""

    def test_requires_two_images(self, black_2x2):
        with pytest.raises(ValueError, match="two images"):
            FrameSequencer([black_2x2], 5)

    @pytest.mark.parametrize("steps", [0, -1, 2.5, True])
    def test_invalid_steps(self, black_2x2, white_2x2, steps):
        with pytest.raises(ValueError, match="steps"):
            FrameSequencer([black_2x2, white_2x2], steps)

    def test_accepts_numpy_integer_steps(self, black_2x2, white_2x2):
        sequencer = FrameSequencer([black_2x2, white_2x2], np.int64(3))
        assert sequencer.steps == 3
        assert type(sequencer.steps) is int
        assert sequencer.total_frames == 4
        assert [r.local for r in sequencer.cursor()] == [0, 1, 2, 0]

    def test_validated_rejects_mixed_sizes(self, black_2x2):
        with pytest.raises(InconsistentImageSizesError, match="Image 1"):
            FrameSequencer.validated([black_2x2, solid(0, 4, 1)], 2)

    def test_validated_accepts_matching_sizes(self, black_2x2, white_2x2):
        sequencer = FrameSequencer.validated([black_2x2, white_2x2], 2)
        assert sequencer.n_images == 2

    def test_images_are_shared_not_copied(self, black_2x2, white_2x2):
        sequencer = FrameSequencer([black_2x2, white_2x2], 3)
        assert sequencer.images[0] is black_2x2
        assert sequencer.images[1] is white_2x2


class TestTotalFrames:
    """Test the output frame count."""

    @pytest.mark.parametrize("n_images,steps", [(2, 1), (2, 50), (3, 1), (4, 3), (5, 7)])
    def test_count(self, n_images, steps):
        sequencer = FrameSequencer([solid(i) for i in range(n_images)], steps)
        assert sequencer.total_frames == (n_images - 1) * steps + 1
        assert len(list(sequencer.recipes())) == sequencer.total_frames


class TestRecipe:
    """Test the closed-form index mapping."""

    def test_mapping(self):
        sequencer = FrameSequencer([solid(0), solid(1), solid(2)], 4)
        recipe = sequencer.recipe(6)
        assert (recipe.segment, recipe.local) == (1, 2)
        assert recipe.fraction == 0.5

    def test_last_index_is_last_image(self):
        sequencer = FrameSequencer([solid(0), solid(1), solid(2)], 4)
        recipe = sequencer.recipe(8)
        assert recipe.is_keyframe
        assert recipe.segment == 2

    @pytest.mark.parametrize("index", [-1, 9, 100])
    def test_out_of_range(self, index):
        sequencer = FrameSequencer([solid(0), solid(1), solid(2)], 4)
        with pytest.raises(IndexError):
            sequencer.recipe(index)

    def test_fractions_stay_below_one(self):
        sequencer = FrameSequencer([solid(0), solid(1), solid(2)], 7)
        assert all(0.0 <= r.fraction < 1.0 for r in sequencer.recipes())


class TestRender:
    """Test frame rendering."""

    def test_black_to_white_two_steps(self, black_2x2, white_2x2):
        sequencer = FrameSequencer([black_2x2, white_2x2], 2)
        frames = [sequencer.frame_at(i) for i in range(sequencer.total_frames)]
        assert frames == [black_2x2, solid(127), white_2x2]

    def test_single_step_yields_sources(self):
        a, b, c = solid(10), solid(20), solid(30)
        sequencer = FrameSequencer([a, b, c], 1)
        frames = [sequencer.frame_at(i) for i in range(sequencer.total_frames)]
        assert frames == [a, b, c]

    def test_keyframes_are_source_objects(self, gradient_images):
        sequencer = FrameSequencer(gradient_images, 3)
        for i, image in enumerate(gradient_images):
            assert sequencer.frame_at(i * 3) is image

    def test_first_and_last_frames(self, gradient_images):
        sequencer = FrameSequencer(gradient_images, 5)
        assert sequencer.frame_at(0) == gradient_images[0]
        assert sequencer.frame_at(sequencer.total_frames - 1) == gradient_images[-1]

    def test_in_between_uses_segment_pair(self, gradient_images):
        sequencer = FrameSequencer(gradient_images, 4)
        expected = sequencer.blender.blend_images(0.25, gradient_images[2], gradient_images[3])
        assert sequencer.frame_at(9) == expected


class TestSequenceCursor:
    """Test the stateful cursor against the closed-form mapping."""

    @pytest.mark.parametrize("n_images,steps", [(2, 1), (2, 50), (4, 3), (3, 1), (5, 2)])
    def test_matches_closed_form(self, n_images, steps):
        sequencer = FrameSequencer([solid(i) for i in range(n_images)], steps)
        assert list(sequencer.cursor()) == list(sequencer.recipes())

    def test_two_images_one_step(self):
        recipes = list(SequenceCursor(2, 1))
        assert [(r.index, r.segment, r.local) for r in recipes] == [(0, 0, 0), (1, 1, 0)]

    def test_boundary_frames(self):
        recipes = list(SequenceCursor(3, 2))
        assert [(r.segment, r.local) for r in recipes] == [
            (0, 0), (0, 1), (1, 0), (1, 1), (2, 0),
        ]

    def test_exhausted_cursor_stays_exhausted(self):
        cursor = SequenceCursor(2, 2)
        assert len(list(cursor)) == 3
        assert list(cursor) == []
