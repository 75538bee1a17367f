"""
Module: editor.controller

Purpose:
    Orchestrate exporting a page.
    Freeze snapshot → Layout → Render → (optional) Write

Key Functions:
    - export_document(): Main entry point for exporting a page

Key Classes:
    - ExportResult: Complete export result
    - ExportError: Nothing to export or the file cannot be written

Dependencies:
    - editor.layout: Placement computation
    - editor.output: Rendering

Used By:
    - Front ends (export button)
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from a4king.core.models import DocumentState, LayoutMode

from .layout import LayoutResult, LayoutStrategy, PageGeometry, compute_for_document
from .output import ExportFormat, ExportRenderer, PageRenderer

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "A4King_Project"


class ExportError(Exception):
    """Error during export."""
    pass


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        data: Encoded artifact
        format: Format of data
        layout: Layout that was rendered
        document: Snapshot that was rendered
        path: File written, if an output directory was given

    Example:
        >>> result = export_document(session.document, PageGeometry.a4(), "pdf")
        >>> result.layout.placement_count
        3
    """
    data: bytes
    format: ExportFormat
    layout: LayoutResult
    document: DocumentState
    path: Optional[Path] = None


def export_document(
    document: DocumentState,
    geometry: PageGeometry,
    target_format: Union[ExportFormat, str],
    *,
    renderer: Optional[ExportRenderer] = None,
    output_dir: Optional[Path] = None,
    name: Optional[str] = None,
    strategies: Optional[Mapping[LayoutMode, LayoutStrategy]] = None,
) -> ExportResult:
    """
    Export a document snapshot.

    The snapshot is immutable, so later edits never reach an export
    in progress. The document is not modified.

    Args:
        document: Snapshot to export (e.g. session.document)
        geometry: Page geometry to lay out on
        target_format: ExportFormat or "png"/"pdf"
        renderer: Renderer to use (default PageRenderer())
        output_dir: If given, also write <name>.<ext> there
        name: File stem; whitespace becomes "_" (default "A4King_Project")
        strategies: Layout strategy per mode (e.g. session.strategies)

    Returns:
        ExportResult with bytes, layout and optional path

    Raises:
        ExportError: If no image is placed or the file cannot be written
        RenderError: If the renderer cannot draw the page
        EncodeError: If the renderer cannot encode the page
    """
    target_format = ExportFormat(target_format)
    renderer = renderer or PageRenderer()
    start_time = time.perf_counter()

    if not document.placed_images():
        logger.warning("Export requested with no placed images")
        raise ExportError("No images placed on the page")

    # 1. Layout
    layout = compute_for_document(document, geometry, strategies=strategies)
    logger.info(
        f"Exporting {layout.placement_count} placements "
        f"({layout.mode.value}, scale {layout.scale:.3f}) as {target_format.extension}"
    )

    # 2. Render (RenderError / EncodeError propagate unchanged)
    data = renderer.render(
        layout,
        geometry,
        target_format,
        settings=document.settings,
    )

    # 3. Write (optional)
    path = None
    if output_dir is not None:
        path = Path(output_dir) / f"{export_filename(name)}.{target_format.extension}"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise ExportError(f"Failed to write {path}: {e}") from e
        logger.info(f"Wrote {path}")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Export completed in {elapsed:.2f}s")

    return ExportResult(
        data=data,
        format=target_format,
        layout=layout,
        document=document,
        path=path,
    )


def export_filename(name: Optional[str]) -> str:
    """
    File stem for an export.

    Example:
        >>> export_filename("My  holiday photos")
        'My_holiday_photos'
    """
    stem = (name or "").strip() or DEFAULT_EXPORT_NAME
    return re.sub(r"\s+", "_", stem)
