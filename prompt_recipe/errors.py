"""Exceptions raised while loading, parsing and querying prompt templates."""

from typing import Any


class PromptRecipeError(Exception):
    """Base exception for prompt template errors."""

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Error message
            suggestion: Optional suggestion for fixing the error
            context: Optional context information
        """
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with suggestion and context."""
        parts = [self.message]

        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")

        if self.context:
            parts.append("\nContext:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "".join(parts)


class TemplateNotFoundError(PromptRecipeError):
    """Raised when a template file cannot be found."""

    pass


class MalformedDocumentError(PromptRecipeError):
    """Raised when a document is not valid YAML or has no usable ``type``."""

    pass


class SchemaMismatchError(PromptRecipeError):
    """Raised when a document of a known type does not match its schema."""

    def __init__(
        self,
        variant: str,
        errors: list[str],
        field: str | None = None,
        source: str = "<string>",
    ) -> None:
        """Initialize the error.

        Args:
            variant: Template type the document was validated against
            errors: One "loc: msg" line per validation error
            field: Dotted path of the first offending field
            source: Source identifier for error messages
        """
        self.variant = variant
        self.errors = errors
        self.field = field
        super().__init__(
            f"Invalid {variant} template:\n" + "\n".join(errors),
            context={"source": source},
        )


class ParameterTypeError(PromptRecipeError, TypeError):
    """Raised when a parameter is read as a scalar kind it does not hold."""

    def __init__(self, name: str, expected: str, actual: str) -> None:
        """Initialize the error.

        Args:
            name: Parameter name
            expected: Scalar kind that was requested
            actual: Scalar kind the parameter holds
        """
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Parameter '{name}' has a value of kind {actual}, expected {expected}",
            suggestion=f"Read '{name}' with the accessor for {actual} values",
        )
