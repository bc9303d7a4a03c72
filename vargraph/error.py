

class GraphError(Exception):
    """
    base class for errors raised by the variation graph
    """
    pass


class DuplicateId(GraphError):
    """
    raised when a record is inserted with an id that is already in use
    """
    pass


class NotFound(GraphError, KeyError):
    """
    raised when an id is referenced but is not in the store
    """

    def __str__(self):
        return Exception.__str__(self)


class OutOfBounds(GraphError, IndexError):
    """
    raised when a position falls outside of the sequence of the variant it references
    """
    pass


class UnanchoredCycle(GraphError):
    pass


class AmbiguousContext(GraphError):
    """
    raised when the join chain for an address cannot be resolved to a single context

    for example if following the joins revisits an address that has already been seen
    """
    pass


class NonAbutting(GraphError):
    pass


class NotMaximal(GraphError):
    """
    raised when two consecutive segments of an allele could be expressed as a single segment
    """
    pass


class LengthMismatch(GraphError):
    pass


class InvalidSegment(GraphError, ValueError):
    pass


class NotSpecifiedError(Exception):
    """
    raised when information is required for a function but has not been given

    for example if allele compatibility is requested but no compatibility function
    was given then this error would be raised
    """
    pass
