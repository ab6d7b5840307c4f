"""Report rendering errors."""


class ReportError(Exception):
    """Base exception for report and chart rendering."""
    pass
