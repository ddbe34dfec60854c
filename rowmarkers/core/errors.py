"""Exceptions raised by the marker builder."""


class RowMarkersError(Exception):
    """Base class for marker builder errors."""


class GeometryResolutionError(RowMarkersError):
    """A row's geo value could not be decoded into points (strict mode only)."""

    def __init__(self, field_id: str, row_index, reason: str):
        self.field_id = field_id
        self.row_index = row_index
        self.reason = reason
        super().__init__(
            f"Could not resolve geometry of field '{field_id}' for row {row_index}: {reason}"
        )


class OptionsFormError(RowMarkersError):
    """A submitted options form value is missing or not one of the choices."""

    def __init__(self, element: str, message: str):
        self.element = element
        super().__init__(f"{element}: {message}")


class GeometryDecodeError(RowMarkersError, ValueError):
    """A geo value is not in the format its field kind promises."""
