"""
Exception hierarchy for knowgraph.

The enrichment core is defined on every structurally valid graph, so the
only failures are contract violations by the caller: a link pointing at a
node that does not exist, an unknown layout request, or a bad config file.
"""


class KnowGraphError(Exception):
    """Base class for all knowgraph errors."""


class GraphIntegrityError(KnowGraphError):
    """
    Raised when a graph is structurally invalid.

    Attributes:
        missing_id: The offending node id (dangling endpoint or duplicate id).
        link_index: Position of the offending link, or None for node errors.
    """

    def __init__(self, missing_id: str, link_index: int | None = None, message: str | None = None):
        self.missing_id = missing_id
        self.link_index = link_index
        if message is None:
            if link_index is None:
                message = f"Duplicate node id '{missing_id}'"
            else:
                message = f"Link {link_index} references unknown node '{missing_id}'"
        self.message = message
        super().__init__(message)


class LayoutError(KnowGraphError):
    """Raised for an unknown layout algorithm or an invalid layout root."""


class ConfigError(KnowGraphError):
    """
    Raised when a configuration file cannot be loaded.

    Attributes:
        path: The configuration file that failed.
    """

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Config '{path}': {message}")
