"""Base exception for ValueTree.

Concrete errors are defined next to the code that raises them and
re-exported from the package root.
"""


class ValueTreeError(Exception):
    """Base class for all ValueTree errors."""
    pass
