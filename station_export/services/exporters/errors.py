"""Export error taxonomy.

Parsing never raises; only the final save step of a renderer (build) or the
worker offload around it (task) can fail.
"""


class ExportError(Exception):
    """Base class for export failures surfaced to callers."""


class ExportBuildError(ExportError):
    """A renderer failed while serializing its output."""


class ExportTaskError(ExportError):
    """The offloaded export computation itself failed or was aborted."""
