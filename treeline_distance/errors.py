"""Exceptions raised while preparing inputs and computing boundary distances."""


class TreelineDistanceError(Exception):
    """Base class for every error raised by this package."""


class InvalidGeometryType(TreelineDistanceError, ValueError):
    """A collection holds geometries outside its allowed types."""

    def __init__(self, collection: str, found, allowed):
        self.collection = collection
        self.found = sorted(str(t) for t in found)
        self.allowed = sorted(allowed)
        super().__init__(
            f"{collection} must only contain {', '.join(self.allowed)} geometries, "
            f"found: {', '.join(self.found)}"
        )


class MissingAttribute(TreelineDistanceError, ValueError):
    """A required attribute column is absent."""


class DuplicateIdentifier(TreelineDistanceError, ValueError):
    """An identifier column has duplicated or missing values."""


class UndefinedCRS(TreelineDistanceError, ValueError):
    """Only one of the collections carries a coordinate reference system."""


class NoPolygonsAvailable(TreelineDistanceError):
    """The polygon collection is empty, so no nearest polygon exists."""


class EmptyResultSet(TreelineDistanceError):
    """Aggregates were requested over an empty result collection."""


class InvalidWeight(TreelineDistanceError, ValueError):
    """The Area weights are missing, not numeric or do not sum to a positive finite value."""
