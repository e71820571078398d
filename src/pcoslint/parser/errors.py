"""Parser error types."""


class ParseError(Exception):
    """Raised when a stylesheet's block structure cannot be recovered.

    ``line`` and ``column`` point at the opening of the unterminated
    construct, or at the offending token.
    """

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.reason = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at line {line}, column {column or 1}"
        super().__init__(message)
