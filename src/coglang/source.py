"""
Script source for the Cog interpreter.

Reads a script file line by line. Lines that cannot be decoded are skipped
with a warning rather than ending the run.

Only '\\n' ends a line, with an optional '\\r' before it, whether the script
comes from a file or from a string.
"""

import codecs
import logging
from pathlib import Path
from typing import Iterator, List, Union


logger = logging.getLogger(__name__)


def strip_line_terminator(line: str) -> str:
    """Remove one trailing '\\n' and one '\\r' before it."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def split_script_lines(source: str) -> List[str]:
    """
    Split script text into lines the same way read_script_lines does.

    A final newline does not start an extra empty line.
    """
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [strip_line_terminator(line) for line in lines]


def read_script_lines(path: Union[str, Path], encoding: str = "utf-8") -> Iterator[str]:
    """
    Yield the lines of a script in file order, without line terminators.

    The file stays open only while the generator is being consumed; closing
    the generator early releases it.

    Args:
        path: Script file to read
        encoding: Text encoding of the file

    Raises:
        OSError: If the file cannot be opened
        LookupError: If the encoding is unknown
    """
    path = Path(path)
    codecs.lookup(encoding)
    with path.open("rb") as fp:
        for line_number, raw in enumerate(fp, start=1):
            try:
                line = raw.decode(encoding)
            except UnicodeDecodeError as e:
                logger.warning("%s:%d: skipping unreadable line (%s)", path, line_number, e.reason)
                continue
            yield strip_line_terminator(line)
