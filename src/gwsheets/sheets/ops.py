"""
The remote side of things.  SheetsBackend is the narrow set of calls the
spreadsheet client needs from the Sheets service, and GoogleSheetsBackend
implements it over the googleapiclient 'sheets v4' resource.
Anything that goes wrong on the way to or from Google comes out as a
TransportFailure naming the call that failed.
"""
from functools import wraps
from typing import Protocol
import logging

import google.auth.exceptions
import httplib2
from googleapiclient.discovery import Resource
from googleapiclient.errors import Error as GoogleApiClientError

from ..exceptions import TransportFailure
from .resources import GoogleSheetsEnum, Spreadsheet, ValueRange
from .requests import GoogleSheetsUpdateRequest, GoogleSheetsUpdateRequestResponse

logger = logging.getLogger(__name__)

# only ask for what the sheet lookups need
_METADATA_FIELDS = "spreadsheetId,properties.title,sheets.properties"

class SheetsBackend(Protocol):
    """What a GoogleSpreadSheet needs from the service"""

    def get_metadata(self, spreadsheetId: str) -> Spreadsheet: ...

    def get_values(self, spreadsheetId: str, range: str) -> ValueRange: ...

    def update_values(self, spreadsheetId: str, data: ValueRange,
                      valueInputOption: str = "RAW") -> dict: ...

    def append_values(self, spreadsheetId: str, data: ValueRange,
                      valueInputOption: str = "RAW",
                      insertDataOption: str = "INSERT_ROWS") -> dict: ...

    def batch_update(self, spreadsheetId: str,
                     request: GoogleSheetsUpdateRequest) -> GoogleSheetsUpdateRequestResponse: ...

def _remote(operation: str):
    """
    Decorator for a backend call: log it, and turn any client, auth or
    connection error into a TransportFailure for the named operation.
    A response that isn't a JSON object of the expected shape is treated
    the same way.
    """
    def _inner_decorator(f):
        @wraps(f)
        def wrapped(self, *args, **kwargs):
            logger.debug("%s %s", operation, args)
            try:
                return f(self, *args, **kwargs)
            except (GoogleApiClientError, google.auth.exceptions.GoogleAuthError,
                    httplib2.HttpLib2Error, OSError, _MalformedResponse) as e:
                logger.error("%s failed: %s", operation, e)
                raise TransportFailure(operation, e) from e
        return wrapped
    return _inner_decorator

class _MalformedResponse(Exception):
    pass

def _checked(response) -> dict:
    if not isinstance(response, dict):
        raise _MalformedResponse(f"expected a JSON object, got {type(response).__name__}")
    return response

def _parsed(cls, response):
    """Build cls from a response body, any shape it can't take is malformed"""
    try:
        return cls.from_dict(_checked(response))
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise _MalformedResponse(f"unexpected {cls.__name__} response: {e}") from e

class GoogleSheetsBackend():
    """
    SheetsBackend over a built googleapiclient service.
    See gwsheets.access.connect() for getting one from credentials.
    Requests go out with num_retries=0, retry policy is up to the caller.
    """
    def __init__(self, service: Resource) -> None:
        self._service = service

    @property
    def service(self) -> Resource:
        return self._service

    @_remote("get_metadata")
    def get_metadata(self, spreadsheetId: str) -> Spreadsheet:
        """
        See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
        Spreadsheet properties and the sheet list, no cell data.
        """
        response = self._service.spreadsheets().get(spreadsheetId=spreadsheetId,
                                                     includeGridData=False,
                                                     fields=_METADATA_FIELDS).execute()
        return _parsed(Spreadsheet, response)

    @_remote("get_values")
    def get_values(self, spreadsheetId: str, range: str) -> ValueRange:
        """
        See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/get
        Trailing empty rows and columns are not returned, an empty range
        comes back with no 'values' at all.
        """
        response = self._service.spreadsheets().values().get(spreadsheetId=spreadsheetId,
                                                             range=range).execute()
        return _parsed(ValueRange, response)

    @_remote("update_values")
    def update_values(self, spreadsheetId: str, data: ValueRange,
                      valueInputOption: str = "RAW") -> dict:
        """
        See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/update
        Overwrites data.range with data.values.
        """
        value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
        if not value_input:
            raise ValueError(f"Invalid valueInputOption value: {valueInputOption}")
        response = self._service.spreadsheets().values().update(spreadsheetId=spreadsheetId,
                                                                range=data.range,
                                                                valueInputOption=value_input,
                                                                body=data.to_base()).execute()
        return _checked(response)

    @_remote("append_values")
    def append_values(self, spreadsheetId: str, data: ValueRange,
                      valueInputOption: str = "RAW",
                      insertDataOption: str = "INSERT_ROWS") -> dict:
        """
        See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append
        The service finds the table in data.range and adds the rows after it.
        """
        value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
        if not value_input:
            raise ValueError(f"Invalid valueInputOption value: {valueInputOption}")
        insert_data = GoogleSheetsEnum.insertDataOption(insertDataOption)
        if not insert_data:
            raise ValueError(f"Invalid insertDataOption value: {insertDataOption}")
        response = self._service.spreadsheets().values().append(spreadsheetId=spreadsheetId,
                                                                range=data.range,
                                                                valueInputOption=value_input,
                                                                insertDataOption=insert_data,
                                                                body=data.to_base()).execute()
        return _checked(response)

    @_remote("batch_update")
    def batch_update(self, spreadsheetId: str,
                     request: GoogleSheetsUpdateRequest) -> GoogleSheetsUpdateRequestResponse:
        """
        See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate
        This is for altering spreadsheet structure and formatting, not cell
        values.  All requests apply or none do.
        """
        response = self._service.spreadsheets().batchUpdate(spreadsheetId=spreadsheetId,
                                                            body=request.to_base()).execute()
        return _parsed(GoogleSheetsUpdateRequestResponse, response)
