"""
Custom exceptions for the conversion engine.

The engine itself degrades gracefully on odd input shapes; these exceptions
are raised at its boundary, when options are validated or input files opened.
"""


class ConversionError(Exception):
    """
    Base exception for all conversion-related errors.

    All other conversion exceptions inherit from this class,
    allowing for broad exception catching when needed.
    """

    pass


class OptionsError(ConversionError):
    """
    Raised when conversion options are unusable.

    Attributes:
        field: The option name that failed validation (optional)
        value: The invalid value (optional)
        message: Detailed error message
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object | None = None,
    ):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with field and value context."""
        if self.field and self.value is not None:
            return f"{self.message} (field='{self.field}', value={self.value!r})"
        elif self.field:
            return f"{self.message} (field='{self.field}')"
        return self.message

