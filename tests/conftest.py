import pytest

from gwsheets.sheets.resources import Spreadsheet, ValueRange
from gwsheets.sheets.requests import GoogleSheetsUpdateRequestResponse

SPREADSHEET_ID = "test-spreadsheet"

class FakeBackend():
    """
    Stands in for the Sheets service: records every call and answers
    from canned data.
    """
    def __init__(self, sheets=None, values=None, replies=None):
        self.sheets = sheets if sheets is not None else [
            {'properties': {'sheetId': 0, 'title': 'Sheet1', 'index': 0}},
            {'properties': {'sheetId': 1234, 'title': 'Data', 'index': 1}},
        ]
        self.values = values or {}
        self.replies = replies if replies is not None else []
        self.calls = []

    def get_metadata(self, spreadsheetId):
        self.calls.append(('get_metadata', spreadsheetId))
        return Spreadsheet.from_dict({'spreadsheetId': spreadsheetId, 'sheets': self.sheets})

    def get_values(self, spreadsheetId, range):
        self.calls.append(('get_values', spreadsheetId, range))
        vr = {'range': range, 'majorDimension': 'ROWS'}
        if range in self.values:
            vr['values'] = self.values[range]
        return ValueRange.from_dict(vr)

    def update_values(self, spreadsheetId, data, valueInputOption="RAW"):
        self.calls.append(('update_values', spreadsheetId, data, valueInputOption))
        return {'spreadsheetId': spreadsheetId, 'updatedRange': data.range}

    def append_values(self, spreadsheetId, data, valueInputOption="RAW", insertDataOption="INSERT_ROWS"):
        self.calls.append(('append_values', spreadsheetId, data, valueInputOption, insertDataOption))
        return {'spreadsheetId': spreadsheetId}

    def batch_update(self, spreadsheetId, request):
        self.calls.append(('batch_update', spreadsheetId, request))
        return GoogleSheetsUpdateRequestResponse.from_dict({'spreadsheetId': spreadsheetId,
                                                            'replies': self.replies})

    def named(self, name):
        return [c for c in self.calls if c[0] == name]

@pytest.fixture
def backend():
    return FakeBackend()
