"""
A1 notation helpers.
See https://developers.google.com/sheets/api/guides/concepts#cell
A general A1 range has the form:

<title>!<start col><start row>:<end col><end row>

    All rows are integers, and are 1 based.
    All cols are letters in a bijective base 26 numbering: A-Z, then AA-ZZ,
    then AAA... so there is no 'zero' letter and A is 1, not 0.
    The title may be left off, which means the first sheet.  A title that
    isn't a plain identifier must be wrapped in single quotes, with any
    single quote inside it doubled.

Only the bounded cell forms are handled here: 'A1', 'A1:C3' and the same
with a title in front.  Everything else is passed straight through to the
Sheets service which understands its own syntax better than we do.
"""
import re

from . import MAX_INDEX
from ..exceptions import InvalidInput, PreconditionViolation, NumericOverflow

# uppercase only, 'ab12' is not a valid address
_A1CELLREGEXSTR = r"(?P<col>[A-Z]+)(?P<row>[0-9]+)"
_A1COLREGEXSTR = r"[A-Z]+"
# a title that can go without quotes
_A1PLAINTITLEREGEXSTR = r"[A-Za-z_][A-Za-z0-9_]*"
_A1QUOTEDTITLEREGEXSTR = r"'(?P<title>(?:[^']|'')+)'"

# longer letter or digit runs are past MAX_INDEX ('FXSHRXW' is MAX_INDEX)
_MAX_COL_LETTERS = 7
_MAX_ROW_DIGITS = len(str(MAX_INDEX))

_a1_cell_re = re.compile(_A1CELLREGEXSTR)
_a1_col_re = re.compile(_A1COLREGEXSTR)
_a1_plain_title_re = re.compile(_A1PLAINTITLEREGEXSTR)
_a1_quoted_title_re = re.compile(_A1QUOTEDTITLEREGEXSTR)

def column_number_to_letters(n: int) -> str:
    """
    Translate a 1-based column index to its letters, 1 -> 'A', 27 -> 'AA'.
    Each step takes (n-1) % 26 as the next letter and then removes that
    letter's worth from n before dividing.  Plain divmod by 26 gets every
    multiple of 26 wrong, there is no zero digit to carry into.

    n:      1-based column index, must be >= 1

    return: Column letters.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise PreconditionViolation(f"column number must be a positive integer, not {n!r}")
    letters = []
    while n > 0:
        r = (n - 1) % 26
        letters.append(chr(ord('A') + r))
        n = (n - r - 1) // 26
    return "".join(reversed(letters))

def letters_to_column_number(letters: str) -> int:
    """
    Inverse of column_number_to_letters(), 'A' -> 1, 'AB' -> 28.

    letters: Non-empty string of A-Z.  Lowercase is rejected.

    return: 1-based column index.
    """
    if not isinstance(letters, str) or not _a1_col_re.fullmatch(letters):
        raise InvalidInput(f"invalid column letters: {letters!r}")
    num = 0
    for i, c in enumerate(reversed(letters)):
        num += (ord(c) - ord('A') + 1) * (26 ** i)
    return num

def format_cell_address(row: int, col: int) -> str:
    """
    Build a cell address from 1-based coordinates, (3, 26) -> 'Z3'.
    Anything below 1 is a caller bug and raises PreconditionViolation.
    """
    if isinstance(row, bool) or not isinstance(row, int) or row < 1:
        raise PreconditionViolation(f"row must be a positive integer, not {row!r}")
    if isinstance(col, bool) or not isinstance(col, int) or col < 1:
        raise PreconditionViolation(f"column must be a positive integer, not {col!r}")
    return f"{column_number_to_letters(col)}{row}"

def parse_cell_address(address: str) -> tuple[int, int]:
    """
    Split a cell address like 'AB123' into (row, col), here (123, 28).

    raises: InvalidInput if it isn't uppercase letters followed by digits
            or the row is 0, NumericOverflow if the row or column is past
            what the API can index.
    """
    m = _a1_cell_re.fullmatch(address) if isinstance(address, str) else None
    if not m:
        raise InvalidInput(f"invalid cell address: {address!r}")
    digits = m.group('row').lstrip('0')
    if not digits:
        raise InvalidInput(f"invalid cell address, rows start at 1: {address!r}")
    if len(digits) > _MAX_ROW_DIGITS or int(digits) > MAX_INDEX:
        raise NumericOverflow(f"row out of range in cell address: {address!r}")
    row = int(digits)
    letters = m.group('col')
    if len(letters) > _MAX_COL_LETTERS:
        raise NumericOverflow(f"column out of range in cell address: {address!r}")
    col = letters_to_column_number(letters)
    if col > MAX_INDEX:
        raise NumericOverflow(f"column out of range in cell address: {address!r}")
    return (row, col)

def quote_title(title: str) -> str:
    """
    Quote a sheet title for use in a range if it needs it.
    'Sheet1' stays as is, "Bob's data" becomes "'Bob''s data'".
    """
    if _a1_plain_title_re.fullmatch(title):
        return title
    return "'" + title.replace("'", "''") + "'"

def format_range(start_row: int, start_col: int,
                 end_row: int|None = None, end_col: int|None = None,
                 sheet: str = "") -> str:
    """
    Generate a bounded A1 range.

    start_row:  1-based starting row.
    start_col:  1-based starting column.
    end_row:    1-based ending row, if None along with end_col the range
                is the single start cell.
    end_col:    1-based ending column, defaults to start_col.
    sheet:      Sheet title, can be empty.

    returns:    A1 string like 'A2:C2' or 'Data!B1'.
    """
    a1 = format_cell_address(start_row, start_col)
    if end_row is not None or end_col is not None:
        er = start_row if end_row is None else end_row
        ec = start_col if end_col is None else end_col
        if er < start_row or ec < start_col:
            raise PreconditionViolation(f"range end ({er},{ec}) is before its start ({start_row},{start_col})")
        a1 += ':' + format_cell_address(er, ec)
    if sheet:
        a1 = quote_title(sheet) + '!' + a1
    return a1

def split_range(a1: str) -> tuple[str, str, str]:
    """
    Take a bounded A1 range and split out its parts.

    a1:     Range like "'My Sheet'!A1:C3", 'A1:C3' or 'Sheet1!B7'

    return: tuple of (title, start cell, end cell), title is unquoted and
            empty if not present, end cell is empty for a single cell.
    """
    if not isinstance(a1, str) or not a1:
        raise InvalidInput(f"invalid range: {a1!r}")
    title = ""
    cells = a1
    m = _a1_quoted_title_re.match(a1)
    if m and a1[m.end():m.end() + 1] == '!':
        title = m.group('title').replace("''", "'")
        cells = a1[m.end() + 1:]
    elif '!' in a1:
        title, _, cells = a1.partition('!')
        if not _a1_plain_title_re.fullmatch(title):
            raise InvalidInput(f"sheet title needs quoting in range: {a1!r}")
    start, _, end = cells.partition(':')
    parse_cell_address(start)
    if end or cells.endswith(':'):
        parse_cell_address(end)
    return (title, start, end)
