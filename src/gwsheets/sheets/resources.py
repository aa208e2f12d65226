"""
Class implementations of sheets request resources.
As these are just logical groupings of data fields we use dataclasses
to implement.  The nested aspect does cause some headaches as there
is a handy dataclass.asdict() method to get a dict translation of the
class fields, which is exactly what that request client needs, but
there's no inverse support, as in initializing a dataclass from a dict.
So dataclasses with dataclasses as fields convert them in fixup().
Only the resources this package actually sends or reads are here, and
unknown keys coming back from the service are dropped.
"""
from dataclasses import dataclass, field, fields
from typing import List

from ..resources import GoogleWorkSpaceResourceBase

class GoogleSheetsEnum():
    """
    An 'enum' in the sheets client is just a string so this is
    just to translate and validate input.
    """
    _VALID_DIMENSION_OPTIONS = {
        "ROWS": "ROWS",
        "R": "ROWS",
        "C": "COLUMNS",
        "COLS": "COLUMNS",
        "COLUMNS": "COLUMNS"
    }
    _VALID_VALUE_INPUT_OPTIONS = {
        "RAW": "RAW",
        "USER": "USER_ENTERED",
        "USER_ENTERED": "USER_ENTERED"
    }
    _VALID_INSERT_DATA_OPTIONS = {
        "INSERT": "INSERT_ROWS",
        "INSERT_ROWS": "INSERT_ROWS",
        "OVERWRITE": "OVERWRITE"
    }

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._VALID_DIMENSION_OPTIONS.get(str(dim).upper(), "")

    @classmethod
    def valueInputOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueInputOption"""
        return cls._VALID_VALUE_INPUT_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def insertDataOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#InsertDataOption"""
        return cls._VALID_INSERT_DATA_OPTIONS.get(str(option).upper(), "")

def _known(cls, d: dict) -> dict:
    """Only keep the keys the dataclass knows about"""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in dict(d).items() if k in names}

@dataclass
class Color(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#color
    Components are 0-1.  None means leave it out of the request, for alpha
    that means fully opaque.
    """
    red: float|None = field(default=None)
    green: float|None = field(default=None)
    blue: float|None = field(default=None)
    alpha: float|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            if v is not None:
                v = float(v)
                if v < 0 or v > 1:
                    raise ValueError(f"Color {f.name} must be between 0 and 1, not {v}")
                setattr(self, f.name, v)

@dataclass
class GridProperties(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#gridproperties"""
    rowCount: int = field(default=-1)
    columnCount: int = field(default=-1)
    frozenRowCount: int = field(default=0)
    frozenColumnCount: int = field(default=0)

@dataclass
class SheetProperties(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties"""
    sheetId: int|None = field(default=None)
    title: str = field(default="")
    index: int|None = field(default=None)
    sheetType: str = field(default="")
    gridProperties: GridProperties|dict|None = field(default=None)
    hidden: bool|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    @classmethod
    def from_dict(cls, d: dict):
        return cls(**_known(cls, d))

    def fixup(self) -> None:
        if isinstance(self.gridProperties, dict):
            self.gridProperties = GridProperties(**_known(GridProperties, self.gridProperties))

@dataclass
class Sheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheet
    Representation of a sheet within a spreadsheet, only the properties matter to us.
    """
    properties: SheetProperties|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SheetProperties):
            self.properties = SheetProperties.from_dict(self.properties)

@dataclass
class Spreadsheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#resource:-spreadsheet
    The representation of a spreadsheet.
    """
    spreadsheetId: str = field(default="")
    properties: dict = field(default_factory=dict)
    sheets: List[Sheet|dict] = field(default_factory=list)
    spreadsheetUrl: str = field(default="")

    def __post_init__(self) -> None:
        self.fixup()

    @classmethod
    def from_dict(cls, d: dict):
        return cls(**_known(cls, d))

    def fixup(self) -> None:
        self.sheets = [s if isinstance(s, Sheet) else Sheet(**_known(Sheet, s)) for s in self.sheets]

    @property
    def title(self) -> str:
        return self.properties.get('title', "")

@dataclass
class GridRange(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#gridrange
    Indexes are 0-based and half open, start inclusive and end exclusive.
    A missing index means unbounded on that side.
    """
    sheetId: int = field(default=-1)
    startRowIndex: int|None = field(default=None)
    endRowIndex: int|None = field(default=None)
    startColumnIndex: int|None = field(default=None)
    endColumnIndex: int|None = field(default=None)

    @classmethod
    def for_cell(cls, sheetId: int, row: int, col: int):
        """GridRange covering exactly one cell given 1-based row/col"""
        return cls(sheetId, row - 1, row, col - 1, col)

@dataclass
class CellFormat(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#cellformat"""
    backgroundColor: Color|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if isinstance(self.backgroundColor, dict):
            self.backgroundColor = Color(**self.backgroundColor)

@dataclass
class CellData(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#celldata"""
    userEnteredFormat: CellFormat|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if isinstance(self.userEnteredFormat, dict):
            self.userEnteredFormat = CellFormat(**self.userEnteredFormat)

@dataclass
class ValueRange(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values#resource:-valuerange"""
    range: str = field(default="")
    majorDimension: str = field(default="ROWS")
    values: List[List[str]] = field(default_factory=list)

    def __post_init__(self):
        self.fixup()

    @classmethod
    def from_dict(cls, d: dict):
        return cls(**_known(cls, d))

    def fixup(self) -> None:
        d = str(self.majorDimension)
        self.majorDimension = GoogleSheetsEnum.dimension(d)
        if not self.majorDimension:
            raise ValueError(f"Invalid majorDimension value: {d}")
