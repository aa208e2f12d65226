"""
A thin wrapper around the Google Sheets v4 Python client.
The goal is to hide the awkward parts, authentication, A1 notation,
the shape of the JSON requests/responses, behind a handful of plain calls:
read a range, write a range, append rows, write a row or a column,
create/rename a sheet and color a cell.

Python dataclasses are used for the resource structs and most of the logic is
translating between those and the raw dicts the Google client deals in.
"""
from .exceptions import (GWSheetsError, InvalidInput, PreconditionViolation,
                         NotFound, NumericOverflow, TransportFailure,
                         ConfigurationError)

__version__ = "0.2.0"
