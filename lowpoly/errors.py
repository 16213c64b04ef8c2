class LowPolyError(Exception):
    """Base class for all failures raised by the generation pipeline."""


class InvalidInputError(LowPolyError, ValueError):
    """Raised when image dimensions or generation parameters are unusable."""


class DecodeError(LowPolyError):
    """Raised when an image source cannot be read into a pixel buffer."""


class TriangulationError(LowPolyError):
    """Raised when the triangulator cannot triangulate the point set."""
