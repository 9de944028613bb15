"""Prompt Recipe - typed prompt templates for completion and chat models."""

__version__ = "0.1.0"

from .errors import (
    MalformedDocumentError,
    ParameterTypeError,
    PromptRecipeError,
    SchemaMismatchError,
    TemplateNotFoundError,
)
from .logger import set_verbosity, setup_logging
from .models import (
    Chat,
    ChatExample,
    Completion,
    CompletionExampleColumn,
    InvocationTemplate,
    Message,
    Parameter,
    ParameterValue,
    Template,
    Unrecognized,
)
from .parser import load_template, parse_template
from .renderer import CompletionRenderer

__all__ = [
    # Parsing
    "parse_template",
    "load_template",
    # Models
    "Template",
    "Completion",
    "Chat",
    "Unrecognized",
    "InvocationTemplate",
    "Parameter",
    "ParameterValue",
    "CompletionExampleColumn",
    "ChatExample",
    "Message",
    # Rendering
    "CompletionRenderer",
    # Exceptions
    "PromptRecipeError",
    "TemplateNotFoundError",
    "MalformedDocumentError",
    "SchemaMismatchError",
    "ParameterTypeError",
    # Logging
    "setup_logging",
    "set_verbosity",
]
