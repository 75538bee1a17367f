"""
Unit tests for the adaptive column packing strategy.
"""

import pytest

from a4king.core.models import LayoutMode
from a4king.editor.layout import (
    AdaptivePackingStrategy,
    FitMode,
    choose_packing,
    compute,
    pack_columns,
)


class TestPackColumns:
    """Tests for the greedy shortest-column packing."""

    def test_pack_columns_when_shorter_column_exists_then_image_goes_there(self, make_image):
        # Arrange: a tall image in column 1 leaves column 0 shorter
        images = [make_image(100, 100), make_image(100, 200), make_image(100, 100)]

        # Act
        packing = pack_columns(images, 2, 200, 1000, gap=0)

        # Assert
        assert [s.column for s in packing.slots] == [0, 1, 0]
        assert [s.offset for s in packing.slots] == [0, 0, 100]
        assert packing.natural_height == 200

    def test_pack_columns_when_heights_tie_then_lowest_index_wins(self, make_image):
        images = [make_image() for _ in range(5)]

        packing = pack_columns(images, 2, 200, 1000, gap=0)

        assert [s.column for s in packing.slots] == [0, 1, 0, 1, 0]

    def test_pack_columns_when_gap_then_trailing_gap_excluded(self, make_image):
        images = [make_image(100, 100), make_image(100, 100)]

        packing = pack_columns(images, 1, 100, 1000, gap=10)

        assert [s.offset for s in packing.slots] == [0, 110]
        assert packing.natural_height == 210

    def test_pack_columns_when_taller_than_page_then_scaled(self, make_image):
        images = [make_image(200, 100) for _ in range(3)]

        packing = pack_columns(images, 1, 600, 800, gap=0)

        assert packing.natural_height == 900
        assert packing.scale == pytest.approx(800 / 900)

    def test_pack_columns_when_fits_then_scale_exactly_one(self, make_image):
        images = [make_image(200, 100) for _ in range(3)]

        packing = pack_columns(images, 1, 600, 900, gap=0)

        assert packing.scale == 1.0


class TestChoosePacking:
    """Tests for the column count search."""

    def test_choose_packing_when_three_landscape_images_then_two_columns(self, make_image):
        """
        600x800 content, three 200x100 images:
        c=1 -> 900 tall, scale 8/9; c=2 -> 300 tall, scale 1; c=3 -> scale 1.
        The first candidate reaching the best scale wins.
        """
        images = [make_image(200, 100) for _ in range(3)]

        packing = choose_packing(images, 600, 800, gap=0)

        assert packing.columns == 2
        assert packing.scale == 1.0
        assert packing.column_width == 300

    def test_choose_packing_when_narrow_columns_then_skipped(self, make_image):
        images = [make_image() for _ in range(6)]

        packing = choose_packing(images, 25, 10_000, gap=0)

        # 3+ columns would be narrower than 10
        assert packing.columns <= 2
        assert packing.column_width >= 10

    def test_choose_packing_when_no_column_wide_enough_then_none(self, make_image):
        assert choose_packing([make_image()], 9, 100, gap=0) is None

    def test_choose_packing_when_many_images_then_at_most_six_columns(self, make_image):
        images = [make_image(100, 400) for _ in range(20)]

        packing = choose_packing(images, 6000, 100, gap=0)

        assert packing.columns <= 6


class TestAdaptiveLayout:
    """Tests for adaptive mode through compute()."""

    def test_compute_when_three_landscape_images_then_formulas_match(self, make_image):
        # Arrange
        images = [make_image(200, 100) for _ in range(3)]

        # Act
        result = compute(images, 600, 800, LayoutMode.ADAPTIVE, gap=0, margin=0)

        # Assert
        assert result.mode is LayoutMode.ADAPTIVE
        assert result.column_count == 2
        assert result.scale == 1.0
        assert result.column_width == 300
        boxes = [(p.x, p.y, p.width, p.height, p.column) for p in result.placements]
        assert boxes == [
            (0, 0, 300, 150, 0),
            (300, 0, 300, 150, 1),
            (0, 150, 300, 150, 0),
        ]
        assert all(p.fit is FitMode.COVER for p in result.placements)

    def test_compute_when_scaled_down_then_block_centred(self, make_image):
        """
        Two 100x200 portraits on 400x300:
        c=1 -> scale 300/1600; c=2 -> 400 tall, scale 0.75 (wins).
        """
        images = [make_image(100, 200), make_image(100, 200)]

        result = compute(images, 400, 300, "adaptive", gap=0, margin=0)

        assert result.scale == pytest.approx(0.75)
        assert result.column_width == pytest.approx(150)
        first, second = result.placements
        assert (first.x, first.y, first.width, first.height) == pytest.approx((50, 0, 150, 300))
        assert second.x == pytest.approx(200)

    def test_compute_when_scaled_down_then_gap_scaled_too(self, make_image):
        images = [make_image(100, 200), make_image(100, 200)]

        result = compute(images, 410, 300, LayoutMode.ADAPTIVE, gap=10, margin=0)

        assert result.scale == pytest.approx(0.75)
        assert result.gap == pytest.approx(7.5)
        first, second = result.placements
        assert first.x == pytest.approx(51.25)
        assert second.x == pytest.approx(51.25 + 150 + 7.5)

    def test_compute_when_margin_then_positions_offset(self, make_image):
        images = [make_image(200, 100) for _ in range(3)]

        result = compute(images, 620, 820, LayoutMode.ADAPTIVE, gap=0, margin=10)

        assert [(p.x, p.y) for p in result.placements] == [(10, 10), (310, 10), (10, 160)]

    @pytest.mark.parametrize("count", [1, 2, 5, 8, 13])
    @pytest.mark.parametrize("page", [(600, 800), (200, 900), (900, 150)])
    def test_compute_when_any_input_then_scale_at_most_one_and_fits(self, make_image, count, page):
        images = [make_image(100 + 37 * i % 200, 80 + 53 * i % 250) for i in range(count)]
        width, height = page

        result = compute(images, width, height, LayoutMode.ADAPTIVE, gap=5, margin=0)

        assert 0 < result.scale <= 1
        assert result.placement_count == count
        assert max(p.bottom for p in result.placements) <= height + 1e-6
        assert min(p.x for p in result.placements) >= -1e-6
        assert max(p.right for p in result.placements) <= width + 1e-6

    def test_compute_when_too_narrow_for_any_column_then_empty(self, make_image):
        result = compute([make_image()], 9, 100, LayoutMode.ADAPTIVE, gap=3, margin=0)

        assert result.is_empty
        assert result.scale == 1.0
        assert result.gap == 3

    def test_strategy_when_custom_limits_then_respected(self, make_image):
        strategy = AdaptivePackingStrategy(max_columns=1)
        images = [make_image(200, 100) for _ in range(3)]

        result = strategy.arrange(images, 600, 800, 0, 0)

        assert result.column_count == 1
        assert result.scale == pytest.approx(800 / 900)
