# designer/errors.py


class DesignerError(Exception):
    """Base class for errors raised by the designer package."""


class InvalidColorError(DesignerError, ValueError):
    """A color prop is not a usable hex string."""

    def __init__(self, value):
        super().__init__(f"Invalid hex color: {value!r}")
        self.value = value


class UnknownComponentError(DesignerError, KeyError):
    """The model asked for a component that is not registered."""

    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown component: {self.name}"


class ExportError(DesignerError):
    """An optional export (PDF, XLSX, PNG, GLB) could not be produced."""
