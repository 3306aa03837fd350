"""Document export engine for block-editor HTML (DOCX, PDF, Markdown)."""

__version__ = "1.0.0"
