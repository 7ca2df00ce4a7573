from __future__ import annotations


class DashboardDataError(Exception):
    """Base class for recoverable data problems; `advisory` is shown to the user."""

    advisory = "Could not load depression data."

    def __init__(self, message: str, *, advisory: str | None = None) -> None:
        super().__init__(message)
        if advisory is not None:
            self.advisory = advisory


class SourceUnavailable(DashboardDataError):
    advisory = "Could not load depression data. Showing fallback values."


class ParseMalformed(DashboardDataError):
    advisory = "Depression data could not be parsed. Showing fallback values."


class EmptyIntersection(DashboardDataError):
    advisory = "No overlapping years between the two datasets."
