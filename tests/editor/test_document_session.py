"""
Unit tests for DocumentSession operations.
"""

import pytest
from PIL import Image

from a4king.core.models import ImageStatus, LayoutMode
from a4king.editor import DocumentSession, EditorConfig, ImagePayload, PageGeometry
from a4king.editor.images import (
    DecodeError,
    ImageTransformService,
    PillowIngestService,
    PillowTransformService,
    TransformError,
    TransformResult,
)


@pytest.fixture
def session():
    return DocumentSession()


def _ids(images):
    return [img.id for img in images]


def _statuses(images):
    return [img.status for img in images]


class TestSessionBasics:
    """Snapshot surface and settings."""

    def test_init_when_new_then_empty_without_history(self, session):
        assert session.current_images() == ()
        assert not session.can_undo()
        assert not session.can_redo()
        assert session.settings.mode is LayoutMode.ADAPTIVE

    def test_add_images_when_empty_batch_then_nothing_pushed(self, session):
        assert session.add_images([]) is False
        assert len(session.history) == 1

    def test_add_images_when_called_then_appended_in_order(self, session, make_image):
        a, b = make_image(status=ImageStatus.HELD), make_image(status=ImageStatus.HELD)

        session.add_images([a])
        session.add_images([b])

        assert _ids(session.current_images()) == [a.id, b.id]
        assert len(session.history) == 3

    def test_undo_when_after_add_then_previous_list(self, session, make_image):
        session.add_images([make_image()])

        session.undo()

        assert session.current_images() == ()
        assert session.can_redo()

    def test_update_settings_when_changed_then_not_recorded_in_history(self, session, make_image):
        """Settings are live configuration and survive undo."""
        # Arrange
        session.add_images([make_image()])

        # Act
        session.update_settings(mode="grid", margin=5)
        session.undo()

        # Assert
        assert len(session.history) == 2
        assert session.document.settings.mode is LayoutMode.GRID
        assert session.document.settings.margin == 5
        assert session.document.images == ()

    def test_update_settings_when_invalid_then_unchanged(self, session):
        with pytest.raises(ValueError):
            session.update_settings(margin=-1)

        assert session.settings.margin == 10.0

    def test_init_when_config_given_then_history_limit_used(self, make_image):
        session = DocumentSession(EditorConfig(history_limit=3))

        for _ in range(5):
            session.add_images([make_image()])

        assert len(session.history) == 3


class TestSessionOperations:
    """Image list operations."""

    def test_delete_when_known_then_removed(self, session, make_image):
        a, b = make_image(), make_image()
        session.add_images([a, b])

        assert session.delete(a.id) is True
        assert _ids(session.current_images()) == [b.id]

    def test_delete_when_unknown_then_nothing_pushed(self, session, make_image):
        session.add_images([make_image()])

        assert session.delete("missing") is False
        assert len(session.history) == 2

    def test_place_when_held_then_placed_in_same_position(self, session, make_image):
        a = make_image(status=ImageStatus.HELD)
        b = make_image(status=ImageStatus.HELD)
        session.add_images([a, b])

        session.place(a.id)

        images = session.current_images()
        assert _ids(images) == [a.id, b.id]
        assert _statuses(images) == [ImageStatus.PLACED, ImageStatus.HELD]

    def test_hold_when_placed_then_held(self, session, make_image):
        a = make_image(status=ImageStatus.PLACED)
        session.add_images([a])

        session.hold(a.id)

        assert session.current_images()[0].status is ImageStatus.HELD

    def test_move_to_end_when_called_then_last_and_placed(self, session, make_image):
        a = make_image(status=ImageStatus.HELD)
        b, c = make_image(), make_image()
        session.add_images([a, b, c])

        session.move_to_end(a.id)

        images = session.current_images()
        assert _ids(images) == [b.id, c.id, a.id]
        assert images[-1].status is ImageStatus.PLACED

    def test_recycle_all_when_placed_images_then_all_held(self, session, make_image):
        session.add_images([make_image(), make_image(status=ImageStatus.HELD)])

        assert session.recycle_all() is True
        assert _statuses(session.current_images()) == [ImageStatus.HELD, ImageStatus.HELD]

    def test_recycle_all_when_nothing_placed_then_nothing_pushed(self, session, make_image):
        session.add_images([make_image(status=ImageStatus.HELD)])

        assert session.recycle_all() is False
        assert len(session.history) == 2

    def test_document_when_read_then_only_placed_are_laid_out(self, session, make_image):
        placed = make_image()
        session.add_images([make_image(status=ImageStatus.HELD), placed])

        assert session.document.placed_images() == [placed]


class TestSessionRotate:
    """Rotation through a transform collaborator."""

    def test_rotate_when_called_then_size_swapped(self, session, make_image):
        img = make_image(200, 100)
        session.add_images([img])

        assert session.rotate(img.id, PillowTransformService()) is True

        rotated = session.current_images()[0]
        assert (rotated.width, rotated.height) == (100, 200)
        assert rotated.content.size == (100, 200)

    def test_rotate_when_four_times_then_original_size(self, session, make_image):
        img = make_image(200, 100)
        session.add_images([img])
        service = PillowTransformService()

        for _ in range(4):
            session.rotate(img.id, service)

        rotated = session.current_images()[0]
        assert (rotated.width, rotated.height) == (200, 100)
        assert len(session.history) == 6

    def test_rotate_when_unknown_then_false(self, session):
        assert session.rotate("missing", PillowTransformService()) is False

    def test_rotate_when_image_removed_during_transform_then_result_discarded(self, session, make_image):
        """A late result never resurrects a deleted image."""
        # Arrange
        img = make_image()
        keep = make_image()
        session.add_images([img, keep])

        class DeletingService(ImageTransformService):
            def rotate90(self, content, width, height):
                session.delete(img.id)
                return TransformResult(content=content, width=height, height=width)

        # Act
        pushed = session.rotate(img.id, DeletingService())

        # Assert
        assert pushed is False
        assert _ids(session.current_images()) == [keep.id]
        assert len(session.history) == 3

    def test_rotate_when_other_edit_during_transform_then_edit_kept(self, session, make_image):
        img = make_image(200, 100)
        other = make_image(status=ImageStatus.HELD)
        session.add_images([img, other])

        class PlacingService(ImageTransformService):
            def rotate90(self, content, width, height):
                session.place(other.id)
                return TransformResult(content=content, width=height, height=width)

        session.rotate(img.id, PlacingService())

        images = session.current_images()
        assert (images[0].width, images[0].height) == (100, 200)
        assert images[1].status is ImageStatus.PLACED

    def test_rotate_when_transform_fails_then_nothing_pushed(self, session, make_image):
        session.add_images([make_image()])
        broken = make_image(image_id="broken")
        session.push_snapshot([*session.current_images(), broken.with_content("not an image", 10, 10)])
        before = len(session.history)

        with pytest.raises(TransformError):
            session.rotate("broken", PillowTransformService())

        assert len(session.history) == before


class TestSessionIngest:
    """Uploads decoded through an ingest collaborator."""

    def test_ingest_when_valid_then_held_images_added(self, session, png_bytes):
        entities = session.ingest([ImagePayload("a.png", png_bytes)], PillowIngestService())

        assert len(entities) == 1
        added = session.current_images()[0]
        assert added.name == "a.png"
        assert added.status is ImageStatus.HELD
        assert (added.width, added.height) == (200, 100)
        assert isinstance(added.content, Image.Image)

    def test_ingest_when_one_payload_corrupt_then_nothing_added(self, session, png_bytes):
        payloads = [ImagePayload("a.png", png_bytes), ImagePayload("b.png", b"not an image")]

        with pytest.raises(DecodeError):
            session.ingest(payloads, PillowIngestService())

        assert session.current_images() == ()
        assert len(session.history) == 1

    def test_ingest_when_batch_then_ids_unique(self, session, png_bytes):
        payloads = [ImagePayload(f"{i}.png", png_bytes) for i in range(5)]

        session.ingest(payloads, PillowIngestService())

        assert len(set(_ids(session.current_images()))) == 5


class TestSessionLayout:
    """Layout of the active document."""

    def test_layout_when_called_then_only_placed_images(self, session, make_image):
        placed = make_image(200, 100)
        session.add_images([placed, make_image(status=ImageStatus.HELD)])

        result = session.layout(PageGeometry(600, 800))

        assert [p.image_id for p in result.placements] == [placed.id]

    def test_layout_when_config_limits_columns_then_single_column(self, make_image):
        # Arrange
        session = DocumentSession(EditorConfig(max_columns=1))
        session.add_images([make_image(200, 100) for _ in range(3)])
        session.update_settings(margin=0, gap=0)

        # Act
        result = session.layout(PageGeometry(600, 800))

        # Assert
        assert result.column_count == 1
        assert {p.column for p in result.placements} == {0}
