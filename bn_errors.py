"""Errors raised by the structure search."""


class StructureSearchError(Exception):
    """Base class for every failure of a structure search."""


class InvalidConfiguration(StructureSearchError):
    """The degree cap (or another search setting) is missing or out of range."""


class InvalidDataset(StructureSearchError):
    """The dataset has no attributes, an empty domain or an out-of-range value."""


class ExternalGraphViolation(StructureSearchError):
    """The graph refused an edge the search had already admitted."""
