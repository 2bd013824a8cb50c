"""Exception hierarchy for incgraph.

Per-file problems (unreadable files, unresolved includes) are not exceptions;
they are logged and collected as build diagnostics. Only failures that stop a
whole phase are raised.
"""


class IncgraphError(Exception):
    """Base class for fatal incgraph errors."""
    pass


class ConfigurationError(IncgraphError):
    """Scan configuration is unusable - the run aborts before scanning.

    Raised for a missing root directory, an invalid exclude pattern or an
    unreadable configuration file.
    """
    pass


class FocusError(IncgraphError):
    """The requested focus file matched zero or several graph nodes."""
    pass


class RenderError(IncgraphError):
    """The external Graphviz renderer is missing or failed."""
    pass
