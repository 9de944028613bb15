"""Jinja2-based renderer for completion prompts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jinja2 import StrictUndefined
from jinja2.sandbox import SandboxedEnvironment

if TYPE_CHECKING:
    from .models import Completion

logger = logging.getLogger(__name__)

Row = list[tuple[str, str]]

# Literal newlines only; block tags must not eat or add whitespace.
COMPLETION_LAYOUT = (
    "{{ prompt }}\n\n"
    "{% for row in rows %}"
    "{% for name, value in row %}{{ name }}: {{ value }}\n{% endfor %}"
    "\n"
    "{% endfor %}"
    "{% for name, value in test_row %}{{ name }}: {{ value }}\n{% endfor %}"
)


class CompletionRenderer:
    """Renders a completion template into its final prompt string."""

    def __init__(self, layout: str = COMPLETION_LAYOUT) -> None:
        """Initialize the renderer with a sandboxed Jinja2 environment.

        Args:
            layout: Jinja2 source receiving ``prompt``, ``rows`` and ``test_row``
        """
        self.env = SandboxedEnvironment(
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=False,
            lstrip_blocks=False,
            keep_trailing_newline=True,
        )
        self._layout = self.env.from_string(layout)

    @staticmethod
    def example_count(completion: Completion) -> int:
        """Return the number of example rows (the longest column's length)."""
        if not completion.examples:
            return 0
        return max(len(column.values) for column in completion.examples)

    def example_rows(self, completion: Completion) -> list[Row]:
        """Build the example table row by row.

        Columns keep their declared order. A column shorter than the longest
        one contributes an empty string for the rows it lacks.

        Args:
            completion: The completion template

        Returns:
            One list of ``(column name, value)`` pairs per example row
        """
        columns = completion.examples or ()
        rows: list[Row] = []
        for i in range(self.example_count(completion)):
            rows.append(
                [
                    (column.name, column.values[i] if i < len(column.values) else "")
                    for column in columns
                ]
            )
        return rows

    @staticmethod
    def test_row(completion: Completion) -> Row:
        """Build the final row from each column's test value."""
        return [
            (column.name, column.test if column.test is not None else "")
            for column in completion.examples or ()
        ]

    def render(self, completion: Completion) -> str:
        """Render the final prompt.

        Args:
            completion: The completion template

        Returns:
            The base prompt, a blank line, each example row followed by a
            blank line, then the test row
        """
        rows = self.example_rows(completion)
        logger.debug(
            "Rendering completion prompt for %s/%s with %d example rows",
            completion.vendor,
            completion.model,
            len(rows),
        )
        return self._layout.render(
            prompt=completion.prompt,
            rows=rows,
            test_row=self.test_row(completion),
        )


default_renderer = CompletionRenderer()
