"""Typed exceptions raised while building a report document."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for report build failures."""

    fail_code = "PIPELINE_ERROR"


class ConfigurationError(ReportError):
    """Invalid page format, missing font resource or unusable defaults file."""

    fail_code = "CONFIG_ERROR"


class LayoutError(ReportError):
    """Raised when a block can never fit on an empty page."""

    fail_code = "LAYOUT_ERROR"


class RenderError(ReportError):
    """Drawing, serialization or output write failed mid-build."""

    fail_code = "RENDER_ERROR"
