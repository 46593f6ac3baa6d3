class MeshwireException(Exception):
    """Base exception for meshwire package"""


class PackageNotFoundError(MeshwireException):
    """No candidate module could be found for a requested extension"""


class PackageLoadError(MeshwireException):
    """A candidate module exists but failed while loading"""


class PubSubCapacityError(MeshwireException):
    """The pub/sub bus has no room for another subscriber"""


class FilterSyntaxError(MeshwireException):
    """A filterBy expression uses syntax outside the filter language"""


class FilterEvaluationError(MeshwireException):
    """A filterBy expression failed while evaluating an event"""
