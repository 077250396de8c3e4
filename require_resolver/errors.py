"""Exceptions raised while reading structural project inputs."""


class StructuralParseError(ValueError):
    """Raised when a sourcemap or project tree does not have the expected shape."""

    def __init__(self, source: str, message: str) -> None:
        """Initialize the error with the offending source and a description."""
        super().__init__(f"{source}: {message}")
        self.source = source
