"""
Exceptions raised by tmotifs.
"""


class InvalidConfigurationError(ValueError):
    """Search parameters or input graph cannot produce a meaningful count.

    Raised before any enumeration happens so that "nothing found" is never
    confused with "misconfigured".
    """


class SearchResourceError(MemoryError):
    """The search ran out of memory or exceeded its explored-state cap.

    Attributes
    ----------
    states : int
        Number of distinct occurrences registered when the search stopped.
    """

    def __init__(self, message: str, states: int = 0):
        super().__init__(message)
        self.states = states
