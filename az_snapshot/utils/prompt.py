"""
Azure Snapshot - Interactive Prompts

Small synchronous prompt helpers: pick one item from a list, ask for a
non-empty value, and ask for a Y/N confirmation.

Input and output are injectable so tests can script the answers.
"""

import sys
from typing import Callable, List, Optional

from az_snapshot.core.exceptions import QueryFailedError, UserAbortError


class Prompter:
    """
    Blocking prompts on a terminal.

    Example:
        prompter = Prompter()
        group = prompter.choose(['rg1', 'rg2'], "Choose resource group:")
        if prompter.confirm("About to restore..."):
            ...
    """

    def __init__(self, input_func: Optional[Callable[[str], str]] = None, output=None):
        """
        Args:
            input_func: Function that shows a prompt and returns one line (default: input)
            output: Stream for menus and messages (default: stdout)
        """
        self.input_func = input_func or input
        self.output = output or sys.stdout

    def _print(self, message: str = ""):
        print(message, file=self.output, flush=True)

    def _read(self, prompt: str) -> str:
        try:
            return self.input_func(prompt)
        except EOFError:
            self._print()
            raise UserAbortError("Aborted (no more input)")

    def choose(self, options: List[str], title: Optional[str] = None) -> str:
        """
        Show a numbered menu and block until one option is picked.

        The answer may be the option number or the option text itself.
        Anything else re-displays the prompt.

        Raises:
            QueryFailedError: If there is nothing to choose from
        """
        if not options:
            raise QueryFailedError(f"Nothing to choose from{': ' + title if title else ''}")

        if title:
            self._print(title)
        for i, option in enumerate(options, 1):
            self._print(f"{i}) {option}")

        while True:
            answer = self._read("#? ").strip()
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1]
            if answer in options:
                return answer
            self._print(f"Invalid selection. Enter a number between 1 and {len(options)}")

    def ask_non_empty(self, message: str) -> str:
        """Ask until the answer is not blank."""
        while True:
            answer = self._read(message).strip()
            if answer:
                return answer

    def confirm(self, message: Optional[str] = None) -> bool:
        """
        Ask 'Continue [Y/N]?'.

        Only an answer starting with Y or y counts as yes.
        """
        if message:
            self._print(message)
        answer = self._read("Continue [Y/N]? ").strip()
        return answer[:1] in ('Y', 'y')
