from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt
from rich.table import Table


class BaseSelectionPrompter(ABC):
    """Contract for asking the operator to pick one of several choices."""

    @abstractmethod
    def select(self, title: str, choices: Sequence[tuple[int, str]]) -> int:
        """Block until the operator picks one choice.

        Args:
            title: Question shown above the choices.
            choices: Ordered (identifier, label) pairs.

        Returns:
            The identifier of the picked choice; always one of ``choices``.

        Raises:
            ValueError: if ``choices`` is empty.
        """


class RichSelectionPrompter(BaseSelectionPrompter):
    """Numbered menu on the terminal; re-asks until a listed number is entered."""

    def __init__(self, console: Console | None = None, stream: TextIO | None = None) -> None:
        self._console = console if console is not None else Console()
        self._stream = stream

    def select(self, title: str, choices: Sequence[tuple[int, str]]) -> int:
        if not choices:
            raise ValueError("Cannot prompt for a selection without choices")
        self._console.print(escape(title))
        table = Table(show_header=False, box=None)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Choice")
        for number, (_, label) in enumerate(choices, start=1):
            table.add_row(str(number), escape(label))
        self._console.print(table)

        numbers = [str(number) for number in range(1, len(choices) + 1)]
        picked = IntPrompt.ask(
            "Enter a number",
            console=self._console,
            choices=numbers,
            show_choices=len(numbers) <= 10,
            stream=self._stream,
        )
        return choices[picked - 1][0]
