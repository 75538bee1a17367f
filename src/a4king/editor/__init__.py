"""
Module: editor

Purpose:
    Page editing pipeline: bounded undo/redo history of document
    snapshots, document operations, layout engine and export.

Key Functions:
    - compute(): Lay out placed images
    - export_document(): Render a snapshot to PNG/PDF

Key Classes:
    - EditorConfig: Configuration for a session
    - DocumentSession: Snapshot history and document operations
    - DragController: Input-agnostic drag and drop
    - HistoryStack: Capped undo/redo log

Dependencies:
    - PIL: Decoding, transforms, raster export
    - reportlab: PDF export
    - a4king.core.models: Document and image models
"""

from .config import EditorConfig
from .history import HistoryStack
from .session import DocumentSession, ImagePayload
from .dragdrop import DragController, Zone
from .layout import compute, compute_for_document, LayoutResult, PageGeometry
from .controller import export_document, ExportResult, ExportError

__all__ = [
    # Config
    "EditorConfig",
    # History / session
    "HistoryStack",
    "DocumentSession",
    "ImagePayload",
    "DragController",
    "Zone",
    # Layout
    "compute",
    "compute_for_document",
    "LayoutResult",
    "PageGeometry",
    # Export
    "export_document",
    "ExportResult",
    "ExportError",
]
