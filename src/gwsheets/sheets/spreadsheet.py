from collections.abc import Iterable
import logging

from ..exceptions import NotFound
from .a1 import format_range, parse_cell_address
from .resources import Color, SheetProperties, ValueRange, GridRange, CellData, CellFormat
from .requests import (UpdateSheetPropertiesRequest, AddSheetRequest,
                       RepeatCellRequest, make_request)
from .ops import SheetsBackend

logger = logging.getLogger(__name__)

def _grid(values: Iterable[Iterable]) -> list[list[str]]:
    return [[str(v) for v in row] for row in values]

class GoogleSpreadSheet():
    """
    A single spreadsheet, addressed by its ID, and the calls to read and
    change it.  Sheet titles and IDs are looked up fresh on every call
    since anyone can rename or add a sheet behind our back.

    Values are always written RAW, what you pass is what lands in the
    cell, no number/date/formula parsing by the service.
    Nothing here retries or holds a lock: two writes to the same range
    race in the service and the last one to arrive wins.
    """
    def __init__(self, backend: SheetsBackend, spreadsheet_id: str) -> None:
        if not spreadsheet_id:
            raise ValueError("spreadsheet_id is required")
        self._backend = backend
        self._id = str(spreadsheet_id)

    def __str__(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def id(self) -> str:
        return self._id

    @property
    def backend(self) -> SheetsBackend:
        return self._backend

    def sheets(self) -> list[SheetProperties]:
        """Properties of every sheet, in tab order"""
        spreadsheet = self._backend.get_metadata(self._id)
        return [s.properties for s in spreadsheet.sheets]

    def get_sheet_title(self, sheet_id: int) -> str|None:
        """Title of the sheet with the given ID, or None if there isn't one"""
        for p in self.sheets():
            if p.sheetId == sheet_id:
                return p.title
        return None

    def get_sheet_id(self, title: str) -> int|None:
        """ID of the sheet with the given title, or None if there isn't one"""
        for p in self.sheets():
            if p.title == title:
                return p.sheetId
        return None

    def read_range(self, range: str) -> list[list[str]]:
        """
        Values of a range in the service's own syntax, e.g. 'Sheet1!A1:C10'.
        Rows come back ragged, trailing empty cells are dropped by the
        service, and an empty range gives an empty list.
        """
        return self._backend.get_values(self._id, str(range)).values

    def write_range(self, range: str, values: Iterable[Iterable]) -> None:
        """Overwrite a range with a row-major grid of values"""
        data = ValueRange(range=str(range), majorDimension="ROWS", values=_grid(values))
        self._backend.update_values(self._id, data, "RAW")

    def append_rows(self, range: str, values: Iterable[Iterable]) -> None:
        """
        Add rows after the table found in range.  New rows are inserted so
        nothing below the table is overwritten.
        """
        data = ValueRange(range=str(range), majorDimension="ROWS", values=_grid(values))
        self._backend.append_values(self._id, data, "RAW", "INSERT_ROWS")

    def write_column(self, col: int, start_row: int, values: Iterable, sheet: str = "") -> None:
        """
        Write values down column col starting at start_row, both 1-based.
        The update is addressed to the start cell only, one value per row.
        Writing nothing is a no-op.
        """
        column = [str(v) for v in values]
        if not column:
            logger.debug("write_column(%s, %s): nothing to write", col, start_row)
            return
        data = ValueRange(range=format_range(start_row, col, sheet=sheet), majorDimension="COLUMNS",
                          values=[[v] for v in column])
        self._backend.update_values(self._id, data, "RAW")

    def write_row(self, row: int, start_col: int, values: Iterable, sheet: str = "") -> None:
        """
        Write values across row starting at start_col, both 1-based.
        Writing nothing is a no-op.
        """
        line = [str(v) for v in values]
        if not line:
            logger.debug("write_row(%s, %s): nothing to write", row, start_col)
            return
        range = format_range(row, start_col, row, start_col + len(line) - 1, sheet)
        data = ValueRange(range=range, majorDimension="ROWS", values=[line])
        self._backend.update_values(self._id, data, "RAW")

    def rename_sheet(self, new_title: str, sheet_id: int = 0) -> None:
        """Change the title of a sheet, by default the first one created (ID 0)"""
        request = UpdateSheetPropertiesRequest(SheetProperties(sheetId=sheet_id, title=str(new_title)),
                                               "title")
        self._backend.batch_update(self._id, make_request([request]))

    def create_sheet(self, title: str) -> int|None:
        """
        Add a new sheet with the given title.
        return: The new sheet's ID, or None if the reply didn't include one.
        """
        request = AddSheetRequest(SheetProperties(title=str(title)))
        response = self._backend.batch_update(self._id, make_request([request]))
        reply = response.reply('addSheet')
        sheet_id = None
        if reply is not None:
            sheet_id = SheetProperties.from_dict(reply.get('properties') or {}).sheetId
        if sheet_id is None:
            logger.warning("addSheet reply for %r had no sheetId: %s", title, response.replies)
        return sheet_id

    def format_cell_background(self, worksheet_title: str, cell_address: str,
                               color: Color|dict) -> None:
        """
        Set the background color of one cell, leaving the rest of its
        format alone.

        worksheet_title:    Title of the sheet the cell is on.
        cell_address:       Cell like 'B7', no sheet prefix.
        color:              Color or dict of red/green/blue/alpha, 0-1.

        raises: NotFound if no sheet has that title, InvalidInput for a
                bad address.
        """
        row, col = parse_cell_address(cell_address)
        sheet_id = self.get_sheet_id(worksheet_title)
        if sheet_id is None:
            raise NotFound(f"no sheet titled {worksheet_title!r} in spreadsheet {self._id}")
        c = color if isinstance(color, Color) else Color(**dict(color))
        request = RepeatCellRequest(GridRange.for_cell(sheet_id, row, col),
                                    CellData(CellFormat(backgroundColor=c)),
                                    "userEnteredFormat(backgroundColor)")
        self._backend.batch_update(self._id, make_request([request]))
