"""
Classes and functions to facilitate working with Google Sheets
"""

# grid indexes in the API are 32-bit signed ints, so no row or
# column can be addressed beyond this
MAX_INDEX = 2**31 - 1

from .a1 import (column_number_to_letters, letters_to_column_number,
                 format_cell_address, parse_cell_address,
                 format_range, split_range)
from .resources import Color, SheetProperties, ValueRange
from .ops import SheetsBackend, GoogleSheetsBackend
from .spreadsheet import GoogleSpreadSheet
