"""
Module: editor.output

Purpose:
    Export rendering. Converts a frozen LayoutResult to PNG or PDF bytes.

Key Classes:
    - ExportRenderer: Renderer interface
    - PageRenderer: Pillow/ReportLab implementation
    - ExportFormat: raster or document

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling

Used By:
    - editor.controller: Export pipeline
"""

from .renderer import ExportFormat, ExportRenderer, PageRenderer, RenderError, EncodeError
from .painting import fit_image, paint_page

__all__ = [
    "ExportFormat",
    "ExportRenderer",
    "PageRenderer",
    "RenderError",
    "EncodeError",
    "fit_image",
    "paint_page",
]
