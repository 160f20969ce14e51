"""
Intcode VM - Program Loader

Program text is comma-separated signed decimal integers, e.g.

    1,9,10,3,2,3,11,0,99,30,40,50

Surrounding whitespace (the trailing newline of an input file) is
stripped; whitespace inside the list is not allowed.
"""

import logging
import re
from pathlib import Path
from typing import List, Union

from .errors import LoadError

logger = logging.getLogger(__name__)

_INT_TOKEN = re.compile(r'[+-]?[0-9]+')


def parse_program(text: str) -> List[int]:
    """Parse comma-separated program text into a list of ints.

    Raises LoadError on empty text, empty tokens or anything that is
    not a plain decimal integer.
    """
    text = text.strip()
    if not text:
        raise LoadError("Program text is empty")

    program = []
    for index, token in enumerate(text.split(',')):
        if not _INT_TOKEN.fullmatch(token):
            raise LoadError(f"Token {index} is not an integer: {token!r}")
        program.append(int(token))
    return program


def load_program_file(path: Union[str, Path]) -> List[int]:
    """Read and parse a program file (UTF-8 text)."""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise LoadError(f"Cannot read program file {path}: {e}") from e

    program = parse_program(text)
    logger.info(f"Loaded program: {path.name} ({len(program)} words)")
    return program
