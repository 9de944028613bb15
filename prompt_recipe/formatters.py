"""Output formatters for rendered completion prompts."""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from .models import Completion


class OutputFormatter(ABC):
    """Base class for output formatters."""

    @abstractmethod
    def format(self, rendered: str, completion: Completion) -> str:
        """Format a rendered prompt.

        Args:
            rendered: The final prompt of ``completion``
            completion: The template the prompt was rendered from

        Returns:
            Formatted output string
        """
        pass


class RawFormatter(OutputFormatter):
    """Plain text output without any decoration."""

    def format(self, rendered: str, completion: Completion) -> str:
        """Return the rendered prompt unchanged."""
        return rendered


class JSONFormatter(OutputFormatter):
    """JSON output with metadata."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def format(self, rendered: str, completion: Completion) -> str:
        """Return JSON formatted output with metadata."""
        output: dict[str, Any] = {
            "prompt": rendered,
            "metadata": {
                "vendor": completion.vendor,
                "model": completion.model,
                "example_count": completion.example_count(),
                # reversed so the first of duplicate names wins
                "parameters": {
                    p.name: p.value for p in reversed(completion.parameters or ())
                },
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        }
        return json.dumps(output, indent=self.indent, ensure_ascii=False)


class MarkdownFormatter(OutputFormatter):
    """Markdown formatted output."""

    def format(self, rendered: str, completion: Completion) -> str:
        """Return Markdown formatted output."""
        lines = [
            f"# {completion.vendor}/{completion.model}",
            "",
            f"**Examples:** {completion.example_count()}",
            f"**Generated:** {datetime.now(timezone.utc).isoformat()}",
            "",
        ]

        if completion.parameters:
            lines.append("## Parameters")
            lines.append("")
            lines.append("| Parameter | Value |")
            lines.append("|-----------|-------|")
            for parameter in completion.parameters:
                val_str = str(parameter.value).replace("|", "\\|")
                lines.append(f"| {parameter.name} | {val_str} |")
            lines.append("")

        lines.append("## Prompt")
        lines.append("")
        lines.append("```")
        lines.append(rendered.rstrip("\n"))
        lines.append("```")

        return "\n".join(lines)


FORMATTERS: dict[str, type[OutputFormatter]] = {
    "raw": RawFormatter,
    "json": JSONFormatter,
    "markdown": MarkdownFormatter,
}


def get_formatter(format_name: str) -> OutputFormatter:
    """Get a formatter instance by name.

    Args:
        format_name: Name of the format (raw, json, markdown)

    Returns:
        OutputFormatter instance

    Raises:
        ValueError: If format name is not recognized
    """
    if format_name not in FORMATTERS:
        valid = ", ".join(FORMATTERS.keys())
        raise ValueError(f"Unknown format '{format_name}'. Valid formats: {valid}")

    return FORMATTERS[format_name]()
