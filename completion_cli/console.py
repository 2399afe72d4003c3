"""Terminal interaction: prompt input, progress spinner and response rendering.

Kept apart from the client so the request/response path can be used and
tested without a terminal.
"""

import asyncio
import contextlib
import itertools
import os
import sys
from typing import TextIO

from completion_cli.constants import (
    FINISH_REASON_FALLBACK,
    ID_FALLBACK,
    MODEL_FALLBACK,
    PROGRESS_MESSAGE,
)
from completion_cli.models import CompletionResponse

try:
    import readline  # noqa: F401  enables line editing for input()
except ImportError:
    readline = None

ANSI_CODES = {
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
}
ANSI_RESET = "\x1b[0m"

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
SPINNER_INTERVAL = 0.08


def _supports_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Console:
    """User interaction collaborator for the CLI."""

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        color: bool | None = None,
    ) -> None:
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.color = _supports_color(self.out) if color is None else color
        self._spinner: asyncio.Task[None] | None = None

    def paint(self, text: str, color: str, *, for_prompt: bool = False) -> str:
        """Wrap text in an ANSI color when colors are enabled."""
        if not self.color:
            return text
        start, end = ANSI_CODES[color], ANSI_RESET
        if for_prompt and readline is not None:
            # Mark escapes as zero-width so readline measures the prompt correctly
            start, end = f"\001{start}\002", f"\001{end}\002"
        return f"{start}{text}{end}"

    def read_line(self, label: str) -> str | None:
        """Read one line from the user, or None if they declined (EOF / Ctrl-C)."""
        name, sep, rest = label.partition(" ")
        prompt = self.paint(name, "cyan", for_prompt=True) + self.paint(
            sep + rest, "green", for_prompt=True
        )
        try:
            return input(prompt)
        except (EOFError, KeyboardInterrupt):
            return None

    @property
    def progress_visible(self) -> bool:
        return self._spinner is not None

    def show_progress(self, message: str = PROGRESS_MESSAGE) -> None:
        """Start the spinner. Must be called from a running event loop."""
        if self._spinner is not None or not _supports_color(self.err):
            return
        self._spinner = asyncio.get_running_loop().create_task(self._spin(message))

    async def hide_progress(self) -> None:
        """Stop the spinner and clear its line."""
        if self._spinner is None:
            return
        spinner, self._spinner = self._spinner, None
        spinner.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await spinner
        self.err.write("\r\x1b[2K")
        self.err.flush()

    async def _spin(self, message: str) -> None:
        for frame in itertools.cycle(SPINNER_FRAMES):
            self.err.write(f"\r{frame} {self.paint(message, 'green')}")
            self.err.flush()
            await asyncio.sleep(SPINNER_INTERVAL)

    def render_response(
        self,
        response: CompletionResponse,
        model_fallback: str = MODEL_FALLBACK,
        id_fallback: str = ID_FALLBACK,
    ) -> None:
        """Print the response header and one block per choice."""
        model = response.model or model_fallback
        completion_id = response.id or id_fallback
        print(
            f"\n\n{self.paint('Response Received', 'green')} from {self.paint(model, 'yellow')}\n"
            f"{self.paint('Completion Id:', 'cyan')} {self.paint(completion_id, 'yellow')}\n",
            file=self.out,
        )

        choices = response.ordered_choices()
        if not choices:
            print(self.paint("No choices received", "red"), file=self.out)
            return

        for choice in choices:
            reason = choice.finish_reason or FINISH_REASON_FALLBACK
            print(
                f"{self.paint('Choice', 'blue')} {self.paint(f'#{choice.index + 1}', 'magenta')}\n"
                f"{choice.text}\n"
                f"{self.paint('Reason:', 'yellow')} {self.paint(reason, 'red')}\n",
                file=self.out,
            )

    def notice(self, message: str) -> None:
        print(self.paint(message, "red"), file=self.out)

    def error(self, message: str) -> None:
        print(f"{self.paint('Error:', 'red')} {message}", file=self.err)
