"""
Unit tests for export_document().
"""

import pytest

from a4king.core.models import DocumentState, ImageStatus, PageSettings
from a4king.editor import ExportError, PageGeometry, export_document
from a4king.editor.controller import export_filename
from a4king.editor.output import ExportFormat, ExportRenderer, PageRenderer, RenderError


class FailingRenderer(ExportRenderer):
    def render(self, layout, geometry, target_format, *, settings=None, draw_cut_lines=False):
        raise RenderError("boom")


@pytest.fixture
def document(make_image):
    images = (make_image(200, 100), make_image(100, 200), make_image(status=ImageStatus.HELD))
    return DocumentState(images=images, settings=PageSettings(mode="grid"))


class TestExportDocument:
    """Tests for the export pipeline."""

    def test_export_when_nothing_placed_then_raises_export_error(self, make_image):
        doc = DocumentState(images=(make_image(status=ImageStatus.HELD),))

        with pytest.raises(ExportError, match="No images"):
            export_document(doc, PageGeometry.a4(), "png")

    def test_export_when_png_then_placed_images_laid_out(self, document):
        result = export_document(document, PageGeometry.a4(210), "png", renderer=PageRenderer(raster_scale=1))

        assert result.format is ExportFormat.RASTER
        assert result.data.startswith(b"\x89PNG")
        assert result.layout.placement_count == 2
        assert result.path is None

    def test_export_when_output_dir_then_file_written(self, document, tmp_path):
        # Act
        result = export_document(
            document,
            PageGeometry.a4(210),
            "pdf",
            renderer=PageRenderer(dpi=72),
            output_dir=tmp_path / "out",
            name="My project",
        )

        # Assert
        assert result.path == tmp_path / "out" / "My_project.pdf"
        assert result.path.read_bytes() == result.data

    def test_export_when_rendered_then_document_unchanged(self, document):
        before = document.images

        result = export_document(document, PageGeometry.a4(210), "png", renderer=PageRenderer(raster_scale=1))

        assert result.document is document
        assert document.images is before

    def test_export_when_renderer_fails_then_error_propagates(self, document, tmp_path):
        with pytest.raises(RenderError, match="boom"):
            export_document(document, PageGeometry.a4(), "pdf", renderer=FailingRenderer(), output_dir=tmp_path)

        assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize("name,expected", [
    (None, "A4King_Project"),
    ("   ", "A4King_Project"),
    ("My  holiday photos", "My_holiday_photos"),
    ("trip\t2024", "trip_2024"),
])
def test_export_filename_when_given_then_whitespace_replaced(name, expected):
    assert export_filename(name) == expected


@pytest.mark.parametrize("fmt", ["png", "pdf"])
def test_export_when_panorama_in_grid_then_rendered(make_image, fmt):
    images = (make_image(2000, 1), make_image(), make_image(), make_image())
    doc = DocumentState(images=images, settings=PageSettings(mode="grid"))

    result = export_document(doc, PageGeometry.a4(210), fmt, renderer=PageRenderer(raster_scale=1, dpi=72))

    assert result.layout.placement_count == 4
    assert result.data
