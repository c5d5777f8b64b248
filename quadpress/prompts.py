"""Interactive reading and validation of the compressor's parameters."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Callable

from quadpress import messages
from quadpress.compression import ErrorMethod

_PHOTO_FORMATS = frozenset({"jpg", "jpeg", "png", "bmp", "tiff", "tif", "webp", "gif", "jp2"})

_INVALID_INPUT = "\nInput tidak sesuai.\n"
_UNSUPPORTED_THRESHOLD = (
    "\nMetode pengukuran eror yang dipilih tidak men-support nilai threshold tersebut.\n"
)
_BAD_EXPORT_ADDRESS = "Tolong input alamat lengkap gambar baru dengan benar.\n"

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)", re.IGNORECASE
)
_TOKEN_RE = re.compile(r"\s*(\S+)(.*)", re.DOTALL)
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


def is_valid_photo(path: str) -> bool:
    """Whether the text after the last dot of ``path`` is a supported image format."""
    return path.rsplit(".", 1)[-1] in _PHOTO_FORMATS


def threshold_in_range(method: ErrorMethod | int, value: float) -> bool:
    """Whether ``value`` is an acceptable threshold for ``method``."""
    try:
        method = ErrorMethod(method)
    except ValueError:
        return False
    if not value >= 0:
        return False
    return method is ErrorMethod.VARIANCE or value <= method.max_threshold()


def _parse_int(token: str) -> int:
    match = _INT_RE.match(token)
    if match is None:
        raise ValueError(f"not a number: {token!r}")
    number = int(match.group())
    if not _INT_MIN <= number <= _INT_MAX:
        raise ValueError(f"number out of range: {token!r}")
    return number


def _parse_float(token: str) -> float:
    match = _FLOAT_RE.match(token)
    if match is None:
        raise ValueError(f"not a number: {token!r}")
    return float(match.group())


def _read_stdin_line() -> str:
    line = sys.stdin.readline()
    if not line:
        raise EOFError
    return line.rstrip("\r\n")


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class Prompter:
    """Asks for each parameter until the answer is acceptable.

    ``read_line`` returns one line of input without its line ending and raises
    ``EOFError`` when input is exhausted; ``write`` shows text to the user.
    Numbers are read as whitespace-separated words, addresses as whole lines.
    """

    def __init__(
        self,
        read_line: Callable[[], str] | None = None,
        write: Callable[[str], object] | None = None,
    ) -> None:
        self._read_line = read_line or _read_stdin_line
        self._write = write or _write_stdout
        self._rest: str | None = None

    def _next_token(self) -> str:
        while True:
            if self._rest is not None:
                match = _TOKEN_RE.match(self._rest)
                if match is not None:
                    self._rest = match.group(2)
                    return match.group(1)
            self._rest = self._read_line()

    def _line_after_token(self) -> str:
        # The character right after the last word read is skipped, then the rest of
        # that line is taken; an empty rest means the next line is read.
        rest, self._rest = self._rest, None
        if rest:
            return rest[1:]
        return self._read_line()

    def _ask_number(
        self,
        prompt: str,
        parse: Callable[[str], float],
        accept: Callable[[float], bool],
        rejection: str = _INVALID_INPUT,
    ):
        while True:
            self._write(prompt)
            try:
                value = parse(self._next_token())
            except ValueError:
                self._write(_INVALID_INPUT)
                continue
            if accept(value):
                return value
            self._write(rejection)

    def _ask_address(self, accept: Callable[[str], bool], rejection: str) -> str:
        first = True
        while True:
            self._write(messages.image_address_prompt())
            line = self._line_after_token() if first else self._read_line()
            first = False
            if accept(line):
                return line
            self._write(rejection)

    def home(self) -> int:
        """Ask whether to compress an image (1) or quit (0)."""
        return self._ask_number(messages.home_prompt(), _parse_int, lambda n: 0 <= n <= 1)

    def import_address(self) -> str:
        """Ask for an existing image file to compress."""
        return self._ask_address(
            lambda s: os.path.exists(s) and is_valid_photo(s), messages.image_not_found()
        )

    def error_method(self) -> ErrorMethod:
        """Ask for the error measurement method."""
        number = self._ask_number(
            messages.error_method_prompt(), _parse_int, lambda n: 1 <= n <= 4
        )
        return ErrorMethod(number)

    def threshold(self, method: ErrorMethod | int) -> float:
        """Ask for a threshold suitable for ``method``."""
        return self._ask_number(
            messages.threshold_prompt(),
            _parse_float,
            lambda n: threshold_in_range(method, n),
            _UNSUPPORTED_THRESHOLD,
        )

    def min_block_size(self) -> int:
        """Ask for the smallest block area that may still be split."""
        return self._ask_number(messages.min_block_size_prompt(), _parse_int, lambda n: n >= 1)

    def compression_percentage(self) -> float:
        """Ask for the target compression ratio between 0 and 1; 0 disables the search."""
        return self._ask_number(
            messages.compression_percentage_prompt(), _parse_float, lambda n: 0 <= n <= 1
        )

    def export_address(self) -> str:
        """Ask where to save the compressed image."""
        return self._ask_address(is_valid_photo, _BAD_EXPORT_ADDRESS)