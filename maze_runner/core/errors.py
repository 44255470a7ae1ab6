class ConfigurationError(ValueError):
    """Bad dimensions, missing maze or unknown solver selection."""


class ParseError(ValueError):
    """A maze file could not be parsed. `line` is 1-based when known."""

    def __init__(self, message: str, line: int = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
