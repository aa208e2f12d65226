from dataclasses import dataclass, field
from typing import List
import re

from ..resources import GoogleWorkSpaceResourceBase
from .resources import SheetProperties, GridRange, CellData

class GoogleSheetsUpdateRequestBase(GoogleWorkSpaceResourceBase):
    """
    Base class for sheet batchUpdate requests to get the actual
    request dict into the right format.
    """
    def to_request(self) -> dict[str,dict]:
        name = self.__class__.__name__
        # need to strip off the trailing 'Request' class name and
        # set the first letter to lower case.  could be done
        # several ways but lets go re
        m = re.match("^([a-zA-Z])([a-zA-Z]+)Request$", name)
        if not m:
            raise RuntimeError("Invalid Google Sheets request format for class name")
        key = m.group(1).lower() + m.group(2)
        return {key: self.trim()}

# the class name is the request key, so UpdateSheetPropertiesRequest
# goes out as {'updateSheetProperties': {...}}

@dataclass
class UpdateSheetPropertiesRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#updatesheetpropertiesrequest
    fields is the mask of what in properties actually gets changed.
    """
    properties: SheetProperties|dict
    fields: str

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SheetProperties):
            self.properties = SheetProperties.from_dict(self.properties)

@dataclass
class AddSheetRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#addsheetrequest
    """
    properties: SheetProperties|dict

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if not isinstance(self.properties, SheetProperties):
            self.properties = SheetProperties.from_dict(self.properties)

@dataclass
class RepeatCellRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#repeatcellrequest
    Applies cell to every cell in range, restricted to the fields mask.
    """
    range: GridRange
    cell: CellData
    fields: str

@dataclass
class GoogleSheetsUpdateRequest(GoogleWorkSpaceResourceBase):
    """
    Generate a GSheet Batch Update request body.
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#request-body
    The service applies all requests or none of them.
    """
    requests: List[GoogleSheetsUpdateRequestBase|dict]
    includeSpreadsheetInResponse: bool = field(default=False)

    def to_base(self) -> dict:
        return {
            'requests': [r.to_request() if isinstance(r, GoogleSheetsUpdateRequestBase) else r
                         for r in self.requests],
            'includeSpreadsheetInResponse': self.includeSpreadsheetInResponse
        }

@dataclass
class GoogleSheetsUpdateRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#response-body
    replies line up with the requests, one each, and are empty dicts for
    requests that have nothing to say.
    """
    spreadsheetId: str = field(default="")
    replies: List[dict] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict):
        d = dict(d or {})
        return cls(d.get('spreadsheetId', ""), list(d.get('replies') or []))

    def reply(self, name: str) -> dict|None:
        """First reply carrying the named key, like 'addSheet'"""
        for r in self.replies:
            if isinstance(r, dict) and isinstance(r.get(name), dict):
                return r[name]
        return None

def make_request(requests: list[GoogleSheetsUpdateRequestBase|dict],
                 includeSpreadsheetInResponse: bool = False) -> GoogleSheetsUpdateRequest:
    """
    Convenience function to assemble the request with the usual parameters.
    """
    return GoogleSheetsUpdateRequest(requests=list(requests),
                                     includeSpreadsheetInResponse=includeSpreadsheetInResponse)
