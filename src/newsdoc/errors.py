"""Domain error kinds raised by conversion, parsing, and packaging"""


class NewsdocError(Exception):
    """Base class for all newsdoc errors."""


class ContentTooComplex(NewsdocError):
    """Markup nesting exceeded the configured depth limit."""

    def __init__(self, depth: int, limit: int):
        self.depth = depth
        self.limit = limit
        super().__init__(f"Markup nesting depth {depth} exceeds limit of {limit}")


class MalformedInput(NewsdocError):
    """Input could not be turned into a markup tree or a collection."""


class PackagingFailed(NewsdocError):
    """The document package could not be built or written."""
