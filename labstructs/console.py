"""Line and token oriented terminal input for the interactive programs."""

from __future__ import annotations

import sys
from collections import deque
from typing import IO, Iterable, Iterator, Optional, Sequence

MENU_PROMPT = "Choose showed alternatives -->"
MENU_ERROR = "Choose the correct number of alternatives!"
EMPTY_INFO_ERROR = "Information cannot be empty!"
POSITIVE_INT_ERROR = "Enter positive int value!"


class EndOfInput(Exception):
    """Raised when the input stream is exhausted."""


class Console:
    """Reads whole lines and whitespace-separated integers from a text stream.

    Integers are taken token by token, so several numbers may share one
    line. Reading a whole line discards any tokens left on the current one.
    """

    def __init__(self, stdin: Optional[IO[str]] = None, stdout: Optional[IO[str]] = None):
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self._tokens: deque[str] = deque()

    def write(self, text: str) -> None:
        self._out.write(text)

    def _raw_line(self) -> str:
        line = self._in.readline()
        if line == "":
            raise EndOfInput
        return line.rstrip("\r\n")

    def _next_token(self) -> str:
        while not self._tokens:
            self._tokens.extend(self._raw_line().split())
        return self._tokens.popleft()

    @staticmethod
    def _parse_int(token: str) -> Optional[int]:
        try:
            return int(token)
        except ValueError:
            return None

    def read_line(self, prompt: str = ">") -> str:
        """Show the prompt and return the next line without its terminator."""
        self._tokens.clear()
        self.write(prompt)
        return self._raw_line()

    def read_nonempty_line(self, prompt: str = ">") -> str:
        """Read lines until one is not empty."""
        line = self.read_line(prompt)
        while not line:
            self.write(EMPTY_INFO_ERROR + "\n")
            line = self.read_line(prompt)
        return line

    def read_int_between(self, low: Optional[int], high: Optional[int], message: str) -> int:
        """Read integers until one lies in [low, high]; a None bound is open."""
        while True:
            value = self._parse_int(self._next_token())
            if (
                value is not None
                and (low is None or value >= low)
                and (high is None or value <= high)
            ):
                return value
            self.write(message + "\n")

    def read_positive_int(self) -> int:
        return self.read_int_between(1, None, POSITIVE_INT_ERROR)

    def menu(self, options: Sequence[str]) -> int:
        """Show the options and return the chosen index; end of input chooses 0."""
        self.write("\n")
        for option in options:
            self.write(option + "\n")
        self.write(MENU_PROMPT + "\n")
        while True:
            try:
                token = self._next_token()
            except EndOfInput:
                return 0
            value = self._parse_int(token)
            if value is not None and 0 <= value < len(options):
                return value
            self.write(f"\n{MENU_ERROR}\n")


def iter_nonempty_lines(stream: Iterable[str]) -> Iterator[str]:
    """Yield the lines of a text stream without terminators, skipping blank ones."""
    for line in stream:
        text = line.rstrip("\r\n")
        if text:
            yield text