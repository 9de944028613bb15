"""Pydantic models for prompt template documents."""

from typing import Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)

from .errors import ParameterTypeError
from .renderer import default_renderer

ParameterValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]
"""Scalar kinds a parameter value may hold."""


def value_kind(value: ParameterValue) -> str:
    """Name the scalar kind of a parameter value."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    return "string"


class Parameter(BaseModel):
    """A named model parameter such as ``temperature``."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., description="Parameter name")
    value: ParameterValue = Field(..., description="Scalar parameter value")


class CompletionExampleColumn(BaseModel):
    """One named column of a completion example table."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr = Field(..., description="Column label")
    values: tuple[StrictStr, ...] = Field(..., description="One value per example row")
    test: StrictStr | None = Field(
        default=None, description="Value for the final test row"
    )


class ChatExample(BaseModel):
    """An example exchange used to prime a chat model."""

    model_config = ConfigDict(frozen=True)

    input: StrictStr
    output: StrictStr | None = None


class Message(BaseModel):
    """One turn of the conversation sent to a chat model."""

    model_config = ConfigDict(frozen=True)

    input: StrictStr
    output: StrictStr | None = None


class InvocationTemplate(BaseModel):
    """Fields and parameter accessors shared by completion and chat templates."""

    model_config = ConfigDict(frozen=True)

    vendor: StrictStr = Field(..., description="Model vendor, e.g. google")
    model: StrictStr = Field(..., description="Model identifier")
    parameters: tuple[Parameter, ...] | None = Field(
        default=None, description="Model parameters"
    )

    def find_parameter(self, name: str) -> ParameterValue | None:
        """Get the value of the first parameter called ``name``.

        Args:
            name: Parameter name (case-sensitive)

        Returns:
            The raw value, or None if no parameter has that name
        """
        for parameter in self.parameters or ():
            if parameter.name == name:
                return parameter.value
        return None

    def parameter_as_int(self, name: str) -> int | None:
        """Get a parameter as an integer.

        Raises:
            ParameterTypeError: If the value is not an integer
        """
        value = self.find_parameter(name)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ParameterTypeError(name, "integer", value_kind(value))
        return value

    def parameter_as_float(self, name: str) -> float | None:
        """Get a parameter as a float. Integer values are widened.

        Raises:
            ParameterTypeError: If the value is not numeric
        """
        value = self.find_parameter(name)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ParameterTypeError(name, "float", value_kind(value))
        return float(value)

    def parameter_as_str(self, name: str) -> str | None:
        """Get a parameter as a string.

        Raises:
            ParameterTypeError: If the value is not a string
        """
        value = self.find_parameter(name)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ParameterTypeError(name, "string", value_kind(value))
        return value

    def parameter_as_bool(self, name: str) -> bool | None:
        """Get a parameter as a boolean.

        Raises:
            ParameterTypeError: If the value is not a boolean
        """
        value = self.find_parameter(name)
        if value is None:
            return None
        if not isinstance(value, bool):
            raise ParameterTypeError(name, "boolean", value_kind(value))
        return value


class Completion(InvocationTemplate):
    """A single-prompt completion template with an example table."""

    type: Literal["completion"] = "completion"
    prompt: StrictStr = Field(..., description="Base prompt text")
    examples: tuple[CompletionExampleColumn, ...] | None = Field(
        default=None, description="Example table, one entry per column"
    )

    def example_count(self) -> int:
        """Get the number of example rows."""
        return default_renderer.example_count(self)

    def final_prompt(self) -> str:
        """Render the prompt followed by the example rows and the test row."""
        return default_renderer.render(self)


class Chat(InvocationTemplate):
    """A chat template with example exchanges and conversation messages."""

    type: Literal["chat"] = "chat"
    examples: tuple[ChatExample, ...] | None = None
    context: StrictStr | None = Field(default=None, description="Chat context")
    messages: tuple[Message, ...] | None = None


class Unrecognized(BaseModel):
    """Placeholder for a document whose ``type`` is not known."""

    model_config = ConfigDict(frozen=True)


Template = Union[Completion, Chat, Unrecognized]
"""Any parsed template document."""
