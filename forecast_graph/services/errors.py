"""Graph pipeline errors."""

from forecast_graph.config.constants import ErrorKind


class GraphPipelineError(ValueError):
    """Raised when a payload cannot be turned into a renderable SVG.

    ``str(error)`` is the user-visible message.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
