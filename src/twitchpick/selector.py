"""Interactive chooser: render entities as an aligned table and read a choice."""

import logging
import sys
from collections.abc import Sequence
from typing import TextIO, TypeVar

import regex

from .errors import InfoOnly, NoResults, ParseFailure, ReadFailure, UserDeclined
from .types import Field, Listable

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Listable)

GUTTER = "   "
RETRY_NOTICE = "Try again!\n"
CONFIRM = "y"
DECLINE = "N"

_GRAPHEME = regex.compile(r"\X")


def display_width(text: str) -> int:
    """Number of extended grapheme clusters in ``text``."""
    return len(_GRAPHEME.findall(text))


def pad(text: str, width: int) -> str:
    """Left-align ``text`` in ``width`` display columns."""
    return text + " " * max(0, width - display_width(text))


def column_widths(rows: Sequence[Sequence[Field]]) -> list[int]:
    """
    Compute the width of each field column.

    Args:
        rows: One list of ``(value, label)`` pairs per entity.

    Returns:
        The largest display width of each column's values.
    """
    if not rows:
        return []
    return [max(display_width(row[i][0]) for row in rows) for i in range(len(rows[0]))]


def render_table(entities: Sequence[Listable]) -> list[str]:
    """
    Render entities as numbered, aligned lines with a header row.

    Columns are sized by :func:`column_widths`, which only looks at values,
    then widened to the label when the label is longer so the header stays
    aligned with its column.

    Raises:
        ValueError: If the entities do not all have the same fields.
    """
    rows = [entity.fields() for entity in entities]
    labels = [label for _, label in rows[0]] if rows else []
    for row in rows:
        if [label for _, label in row] != labels:
            msg = f"Cannot render rows with different fields: {labels} and {row}"
            raise ValueError(msg)

    widths = [
        max(width, display_width(label))
        for width, label in zip(column_widths(rows), labels, strict=True)
    ]
    number_width = len(str(len(rows)))

    header = " " * (number_width + 2) + "".join(
        pad(label, width) + GUTTER for label, width in zip(labels, widths, strict=True)
    )
    lines = [header.rstrip()]
    for index, row in enumerate(rows, 1):
        cells = "".join(
            pad(value, width) + GUTTER for (value, _), width in zip(row, widths, strict=True)
        )
        lines.append(f"{index:>{number_width}}) {cells}".rstrip())
    return lines


def parse_choice(text: str, count: int) -> int:
    """
    Turn a typed option number into a 0-based index.

    Raises:
        ParseFailure: If ``text`` is not an integer in ``1..count``.
    """
    try:
        choice = int(text, 10)
    except ValueError:
        raise ParseFailure(text, count) from None
    if not 1 <= choice <= count:
        raise ParseFailure(text, count)
    return choice - 1


def read_line(stdin: TextIO) -> str:
    """
    Read one trimmed line.

    Raises:
        ReadFailure: On end of input or a read error.
    """
    try:
        line = stdin.readline()
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFailure(e) from e
    if not line:
        raise ReadFailure
    return line.strip()


def print_table(entities: Sequence[Listable], stdout: TextIO) -> None:
    for line in render_table(entities):
        print(line, file=stdout)


def confirm(entity: T, stdin: TextIO, stdout: TextIO) -> T:
    """Ask whether to pick the only entity, until the answer is y or N."""
    while True:
        print(f"Watch {entity.name}? [y/N]", file=stdout, flush=True)
        answer = read_line(stdin)
        if answer == CONFIRM:
            return entity
        if answer == DECLINE:
            raise UserDeclined
        print(RETRY_NOTICE, file=stdout)


def choose(
    entities: Sequence[T],
    info: bool,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> T:
    """
    Let the user pick one entity.

    With a single entity the user confirms it; with several a numbered table is
    printed and option numbers are read until one is valid. In info mode the
    table is printed and nothing is read.

    Args:
        entities: Entities to choose from, all of the same kind.
        info: Only print the table.
        stdin: Where answers are read from (default: sys.stdin).
        stdout: Where the table and prompts go (default: sys.stdout).

    Returns:
        The chosen entity.

    Raises:
        InfoOnly: In info mode, after printing the table.
        UserDeclined: If the single entity was declined.
        ReadFailure: If input ends or cannot be read.
        NoResults: If there is nothing to choose from.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    count = len(entities)

    if count == 0:
        raise NoResults

    if info:
        print_table(entities, stdout)
        raise InfoOnly

    if count == 1:
        return confirm(entities[0], stdin, stdout)

    print(f"Choose by typing the number next to the option [1 - {count}]", file=stdout)
    print_table(entities, stdout)
    stdout.flush()

    while True:
        text = read_line(stdin)
        try:
            index = parse_choice(text, count)
        except ParseFailure as e:
            logger.debug("Rejected choice: %s", e)
            print(RETRY_NOTICE, file=stdout, flush=True)
            continue
        logger.debug("Chose option %d of %d", index + 1, count)
        return entities[index]
