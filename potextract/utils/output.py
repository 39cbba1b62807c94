"""Console summary of extraction statistics."""

from dataclasses import dataclass

import click

from potextract.models.messages import ExtractorStats

INDENTATION = 2


@dataclass
class _StatsLine:
    number: int
    text: str
    secondary_text: str | None = None


class StatsOutput:
    """Formats ExtractorStats as a short aligned table.

    Example output::

          3 messages extracted
          ----------------------------------
          5 total usages
          2 files (1 with messages)
          1 message context (default)
    """

    def __init__(self, stats: ExtractorStats) -> None:
        self.stats = stats
        numbers = [line.number for line in self._lines()] + [stats.number_of_messages]
        self._number_width = max(len(str(n)) for n in numbers)

    def _lines(self) -> list[_StatsLine]:
        stats = self.stats
        return [
            _StatsLine(
                stats.number_of_message_usages,
                "total usage" if stats.number_of_message_usages == 1 else "total usages",
            ),
            _StatsLine(
                stats.number_of_parsed_files,
                "file" if stats.number_of_parsed_files == 1 else "files",
                f"({stats.number_of_parsed_files_with_messages} with messages)",
            ),
            _StatsLine(
                stats.number_of_contexts,
                "message context" if stats.number_of_contexts == 1 else "message contexts",
                "(default)" if stats.number_of_contexts == 1 else None,
            ),
        ]

    def _pad(self, value: int) -> str:
        return str(value).rjust(self._number_width)

    def _title(self) -> str:
        count = self.stats.number_of_messages
        noun = "message" if count == 1 else "messages"
        return f"{self._pad(count)} {noun} extracted"

    def render(self, color: bool = True) -> list[str]:
        """Return the output lines, styled with click when `color` is set."""

        def green(value: str) -> str:
            return click.style(value, fg="green") if color else value

        def grey(value: str) -> str:
            return click.style(value, fg="bright_black") if color else value

        lines = self._lines()
        title = self._title()
        width = max(
            [len(title)]
            + [
                self._number_width + 1 + len(line.text)
                + (len(line.secondary_text) + 1 if line.secondary_text else 0)
                for line in lines
            ]
        )

        indent = " " * INDENTATION
        output = ["", indent + green(title), indent + grey("-" * (width + 1))]
        for line in lines:
            text = f"{self._pad(line.number)} {line.text}"
            if line.secondary_text:
                text += " " + grey(line.secondary_text)
            output.append(indent + text)
        output.append("")
        return output

    def print(self, err: bool = False) -> None:
        for line in self.render():
            click.echo(line, err=err)
