"""
Delimited-text parser for Map Studio Ingest.

Turns pasted CSV/TSV text into a ParsedDataset. The parser is deliberately
permissive: it never raises for malformed input and instead returns its best
field alignment, so messy spreadsheet pastes always produce something the user
can inspect.

Rules:
    - Blank or whitespace-only input yields an empty dataset
    - The first line decides the delimiter: tab if it contains one, else comma
    - Double quotes enclose fields; a doubled quote inside a quoted field is
      a literal quote. Fields cannot span lines
    - Every field is trimmed; quote characters other than escaped literals
      are dropped
    - Line 0 is the header; duplicate header names are kept as-is

Functions:
    detect_delimiter: Pick the delimiter from the header line
    split_delimited_line: Quote-aware split of a single line
    sanitize_values: Trim surrounding whitespace from fields
    parse_delimited_text: Parse raw text into a ParsedDataset
"""

from typing import List

from core.models import ParsedDataset, Row
from utils.logger import get_logger

logger = get_logger(__name__)

TAB = '\t'
COMMA = ','
QUOTE = '"'


def detect_delimiter(header_line: str) -> str:
    """Tab when the header line contains one, comma otherwise."""
    return TAB if TAB in header_line else COMMA


def split_delimited_line(line: str, delimiter: str = COMMA) -> List[str]:
    """
    Split one line on ``delimiter`` while honouring double-quote enclosure.

    Walks the line with two states, quoted and unquoted. A quote toggles the
    state, except that two consecutive quotes inside a quoted field emit one
    literal quote. An unterminated quote simply swallows the rest of the line
    into the current field.

    Parameters:
    -----------
    line : str
        A single line of text (no embedded newlines)
    delimiter : str
        Field separator

    Returns:
    --------
    List[str]
        Raw, unsanitised field values

    Example:
        >>> split_delimited_line('"a""b",c')
        ['a"b', 'c']
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < len(line) and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append(''.join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append(''.join(current))
    return fields


def sanitize_values(values: List[str]) -> List[str]:
    """
    Trim surrounding whitespace from every field.

    Enclosing and stray quote characters never reach this point: the splitter
    consumes every quote that is not a doubled ``""`` escape, so only literal
    quotes the user escaped survive sanitising.
    """
    return [value.strip() for value in values]


def parse_delimited_text(raw_text: str) -> ParsedDataset:
    """
    Parse delimited text into rows keyed by the header line.

    Each data line is aligned to the header by position: a short line gets
    empty strings for its missing trailing columns and fields past the last
    header are dropped. With duplicate header names the row keeps the value
    of the last duplicate column.

    Parameters:
    -----------
    raw_text : str
        Pasted or uploaded text, lines separated by ``\\n``

    Returns:
    --------
    ParsedDataset
        Rows plus header columns in first-seen order; empty for blank input

    Example:
        >>> dataset = parse_delimited_text("a,b\\n1,2")
        >>> dataset.columns
        ('a', 'b')
        >>> dataset.rows[0]['b']
        '2'
    """
    trimmed = (raw_text or '').strip()
    if not trimmed:
        return ParsedDataset(rows=(), columns=())

    lines = trimmed.split('\n')
    delimiter = detect_delimiter(lines[0])
    columns = sanitize_values(split_delimited_line(lines[0], delimiter))

    if len(set(columns)) != len(columns):
        logger.debug(f"Header contains duplicate column names: {columns}")

    rows = []
    for line in lines[1:]:
        values = sanitize_values(split_delimited_line(line, delimiter))
        rows.append(Row(
            (column, values[index] if index < len(values) else '')
            for index, column in enumerate(columns)
        ))

    logger.debug(
        f"Parsed {len(rows)} row(s) x {len(columns)} column(s) "
        f"using {'tab' if delimiter == TAB else 'comma'} delimiter"
    )

    return ParsedDataset(rows=tuple(rows), columns=tuple(columns))
