"""Export services for editor documents.

Architecture:
- BaseExporter: parsing, filenames and the (bytes, filename, content_type) contract
- DocxExporter: Word package via python-docx
- PdfExporter: paginated A4 PDF via PyMuPDF
- MarkdownExporter: Markdown text
- HtmlExporter: standalone styled HTML page
"""

from .base_exporter import BaseExporter
from .docx_exporter import DocxExporter
from .errors import ExportBuildError, ExportError, ExportTaskError
from .html_exporter import HtmlExporter
from .markdown_exporter import MarkdownExporter
from .pdf_exporter import PdfExporter

__all__ = [
    'BaseExporter',
    'DocxExporter',
    'PdfExporter',
    'MarkdownExporter',
    'HtmlExporter',
    'ExportError',
    'ExportBuildError',
    'ExportTaskError',
]
