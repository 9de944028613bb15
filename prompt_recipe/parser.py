"""Parsing of prompt template documents into typed templates."""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import (
    MalformedDocumentError,
    PromptRecipeError,
    SchemaMismatchError,
    TemplateNotFoundError,
)
from .models import Chat, Completion, Template, Unrecognized

logger = logging.getLogger(__name__)

BOOL_TAG = "tag:yaml.org,2002:bool"


class TemplateLoader(yaml.SafeLoader):
    """Safe YAML loader whose booleans follow YAML 1.2.

    Only ``true`` and ``false`` (in lower, title or upper case) are booleans;
    ``yes``, ``no``, ``on`` and ``off`` load as strings.
    """


TemplateLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
TemplateLoader.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)

VARIANTS: dict[str, type[Completion] | type[Chat]] = {
    "completion": Completion,
    "chat": Chat,
}


def read_discriminator(
    content: str, source: str = "<string>"
) -> tuple[str, dict[str, Any]]:
    """Load a YAML document and read its ``type`` field.

    Args:
        content: YAML or JSON content
        source: Source identifier for error messages

    Returns:
        The discriminator and the loaded mapping

    Raises:
        MalformedDocumentError: If the content is not a mapping with a
            string ``type``
    """
    try:
        data = yaml.load(content, Loader=TemplateLoader)
    except yaml.YAMLError as e:
        raise MalformedDocumentError(
            f"Failed to parse YAML: {e}",
            suggestion="Check YAML syntax and indentation",
            context={"source": source},
        )

    if not isinstance(data, dict):
        raise MalformedDocumentError(
            "Template must be a YAML dictionary/object",
            suggestion="Ensure template starts with key-value pairs, not a list",
            context={"source": source, "got_type": type(data).__name__},
        )

    if "type" not in data:
        raise MalformedDocumentError(
            "Template has no 'type' field",
            suggestion="Add 'type: completion' or 'type: chat'",
            context={"source": source},
        )

    prompt_type = data["type"]
    if not isinstance(prompt_type, str):
        raise MalformedDocumentError(
            "Template 'type' must be a string",
            context={"source": source, "got_type": type(prompt_type).__name__},
        )

    return prompt_type, data


def parse_template(content: str, source: str = "<string>") -> Template:
    """Parse a YAML/JSON document into a template.

    Documents whose ``type`` is neither ``completion`` nor ``chat`` parse to
    :class:`Unrecognized` so that files describing other kinds of templates
    can sit alongside these ones.

    Args:
        content: YAML or JSON content
        source: Source identifier for error messages

    Returns:
        A Completion, Chat or Unrecognized template

    Raises:
        MalformedDocumentError: If the document or its ``type`` is invalid
        SchemaMismatchError: If the document does not match its type's schema
    """
    prompt_type, data = read_discriminator(content, source=source)

    model_cls = VARIANTS.get(prompt_type)
    if model_cls is None:
        logger.debug("Ignoring template of type %r from %s", prompt_type, source)
        return Unrecognized()

    try:
        template = model_cls.model_validate(data)
    except ValidationError as e:
        errors = []
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"])
            errors.append(f"  {loc}: {err['msg']}")

        first_loc = e.errors()[0]["loc"] if e.errors() else ()
        raise SchemaMismatchError(
            prompt_type,
            errors,
            field=".".join(str(x) for x in first_loc) or None,
            source=source,
        )

    logger.debug(
        "Parsed %s template for %s/%s from %s",
        prompt_type,
        template.vendor,
        template.model,
        source,
    )
    return template


def load_template(path: str | Path) -> Template:
    """Load a template from a YAML or JSON file.

    Args:
        path: Path to the template file

    Returns:
        The parsed template

    Raises:
        TemplateNotFoundError: If file doesn't exist
        PromptRecipeError: If the file cannot be read or parsed
    """
    path = Path(path)

    if not path.exists():
        raise TemplateNotFoundError(
            f"Template file not found: {path}",
            suggestion="Check the file path and ensure the file exists",
            context={"path": str(path.absolute())},
        )

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PromptRecipeError(
            f"Failed to read template file: {e}",
            context={"path": str(path)},
        )

    return parse_template(content, source=str(path))
