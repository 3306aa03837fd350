"""Base exporter shared by the DOCX, PDF, Markdown and HTML renderers.

Each subclass renders a ParsedDocument to bytes; parsing, filename handling
and the (bytes, filename, content_type) contract live here.
"""

import re
from abc import ABC, abstractmethod
from typing import Tuple

from station_export.schemas.document import ParsedDocument
from station_export.services.markup import parse_document


class BaseExporter(ABC):
    """Base class for all exporters with common utilities.

    An exporter instance is cheap and holds no state between calls; all
    per-document state is created inside ``render``.
    """

    @property
    @abstractmethod
    def format(self) -> str:
        """Format identifier (e.g., 'docx', 'pdf')"""
        pass

    @property
    @abstractmethod
    def content_type(self) -> str:
        """MIME type of the rendered bytes"""
        pass

    @abstractmethod
    def render(self, document: ParsedDocument) -> bytes:
        """Render the document model to bytes.

        Raises:
            ExportBuildError: If the final serialization step fails
        """
        pass

    def build(self, title: str, html: str) -> bytes:
        """Markup -> bytes. Renderers that work on the model keep this default."""
        return self.render(parse_document(title, html))

    def export(self, title: str, html: str) -> Tuple[bytes, str, str]:
        """
        Parse editor HTML and render it.

        Args:
            title: Document title, rendered above the content
            html: Editor HTML

        Returns:
            Tuple of (bytes, filename, content_type)
        """
        content = self.build(title, html)
        filename = self.sanitize_filename(f"{title or 'document'}.{self.format}")
        return content, filename, self.content_type

    def sanitize_filename(self, filename: str, max_length: int = 50) -> str:
        """Sanitize filename for safe download."""
        # Remove invalid characters
        filename = re.sub(r'[^a-zA-Z0-9._-]', '_', filename)
        # Remove multiple underscores
        filename = re.sub(r'_+', '_', filename)
        # Limit length
        if len(filename) > max_length:
            name, ext = filename.rsplit('.', 1) if '.' in filename else (filename, '')
            name = name[:max_length-len(ext)-1]
            filename = f"{name}.{ext}" if ext else name
        name, _, ext = filename.rpartition('.')
        if not name.strip('_.'):
            filename = f"document.{ext}"
        return filename.lower()
