"""
Interactive read-evaluate-print loop.

Reads one expression per line, prints each result on stdout and each
error on stderr, and keeps going until ``exit`` or end of input. A failure
to read the input stream is the only fatal condition.
"""

from __future__ import annotations

import logging
from typing import TextIO

from exprcalc.core.calculator import is_exit_command, trace
from exprcalc.core.config import CalcConfig
from exprcalc.core.errors import CalcError, InputError
from exprcalc.core.expression_lang.tokenizer import render_tokens

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1


def read_line(stream: TextIO) -> str | None:
    """Read one line, returning None at end of input.

    Raises:
        InputError: If the stream cannot be read or decoded.
    """
    try:
        line = stream.readline()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Input Error: {e}") from e
    if line == "":
        return None
    return line


def run_repl(config: CalcConfig, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    """Run the loop until ``exit``, end of input, or a read failure.

    Returns:
        Process exit status: 0 on ``exit`` or end of input, 1 when the
        input could not be read.
    """
    lines_read = 0
    while True:
        if config.prompt:
            stdout.write(config.prompt)
            stdout.flush()

        try:
            line = read_line(stdin)
        except InputError as e:
            stderr.write(f"{e.message}\n")
            logger.error("Stopping after %d lines: %s", lines_read, e)
            return EXIT_INPUT_ERROR

        if line is None:
            logger.debug("End of input after %d lines", lines_read)
            return EXIT_OK
        lines_read += 1

        if is_exit_command(line):
            return EXIT_OK

        try:
            calculation = trace(line, max_depth=config.max_depth)
        except CalcError as e:
            stderr.write(f"{e.message}\n")
            continue

        if config.show_tokens:
            stdout.write(f"tokens: {render_tokens(calculation.tokens)}\n")
        if config.show_tree:
            stdout.write(f"tree: {calculation.tree}\n")
        stdout.write(f"{calculation.value}\n")
        stdout.flush()
