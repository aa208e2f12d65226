import pytest

from gwsheets.sheets.spreadsheet import GoogleSpreadSheet
from gwsheets.sheets.resources import Color
from gwsheets.exceptions import NotFound, InvalidInput, PreconditionViolation, TransportFailure

from conftest import FakeBackend, SPREADSHEET_ID

@pytest.fixture
def ss(backend):
    return GoogleSpreadSheet(backend, SPREADSHEET_ID)

def test_requires_id(backend):
    with pytest.raises(ValueError):
        GoogleSpreadSheet(backend, "")

def test_sheet_lookups(ss):
    assert(ss.get_sheet_title(1234) == "Data")
    assert(ss.get_sheet_title(0) == "Sheet1")
    assert(ss.get_sheet_title(99) is None)
    assert(ss.get_sheet_id("Data") == 1234)
    assert(ss.get_sheet_id("Sheet1") == 0)
    assert(ss.get_sheet_id("data") is None)
    assert([p.title for p in ss.sheets()] == ["Sheet1", "Data"])

def test_lookup_is_fresh_every_time(ss, backend):
    ss.get_sheet_id("Data")
    backend.sheets = [{'properties': {'sheetId': 1234, 'title': 'Renamed', 'index': 0}}]
    assert(ss.get_sheet_id("Data") is None)
    assert(ss.get_sheet_title(1234) == "Renamed")

def test_read_range(backend):
    backend.values = {"Sheet1!A1:C2": [["a", "b", "c"], ["d"]]}
    ss = GoogleSpreadSheet(backend, SPREADSHEET_ID)
    assert(ss.read_range("Sheet1!A1:C2") == [["a", "b", "c"], ["d"]])
    assert(backend.named('get_values') == [('get_values', SPREADSHEET_ID, "Sheet1!A1:C2")])

def test_read_empty_range(ss):
    assert(ss.read_range("Sheet1!Z1:Z9") == [])

def test_write_range(ss, backend):
    ss.write_range("Sheet1!A1:B2", [["1", "=SUM(A1)"], [3, "x"]])
    (_, sid, data, option), = backend.named('update_values')
    assert(sid == SPREADSHEET_ID)
    assert(option == "RAW")
    assert(data.range == "Sheet1!A1:B2")
    assert(data.majorDimension == "ROWS")
    assert(data.values == [["1", "=SUM(A1)"], ["3", "x"]])

def test_append_rows(ss, backend):
    ss.append_rows("Data!A1:C1", [["x", "y", "z"]])
    (_, _, data, value_option, insert_option), = backend.named('append_values')
    assert(data.range == "Data!A1:C1")
    assert(data.values == [["x", "y", "z"]])
    assert(value_option == "RAW")
    assert(insert_option == "INSERT_ROWS")

def test_write_row(ss, backend):
    ss.write_row(row=2, start_col=1, values=["x", "y", "z"])
    (_, _, data, option), = backend.named('update_values')
    assert(data.range == "A2:C2")
    assert(data.majorDimension == "ROWS")
    assert(data.values == [["x", "y", "z"]])
    assert(option == "RAW")

def test_write_row_on_sheet(ss, backend):
    ss.write_row(703, 137, ["v"], sheet="My Data")
    (_, _, data, _), = backend.named('update_values')
    assert(data.range == "'My Data'!EG703:EG703")

def test_write_column(ss, backend):
    ss.write_column(col=2, start_row=1, values=["x", "y"])
    (_, _, data, option), = backend.named('update_values')
    assert(data.range == "B1")
    assert(data.majorDimension == "COLUMNS")
    assert(data.values == [["x"], ["y"]])
    assert(option == "RAW")

def test_write_column_on_sheet(ss, backend):
    ss.write_column(137, 703, [1, 2, 3], sheet="Data")
    (_, _, data, _), = backend.named('update_values')
    assert(data.range == "Data!EG703")
    assert(data.values == [["1"], ["2"], ["3"]])

def test_write_nothing(ss, backend):
    ss.write_row(1, 1, [])
    ss.write_column(1, 1, [])
    assert(backend.calls == [])

def test_write_bad_coordinates(ss, backend):
    with pytest.raises(PreconditionViolation):
        ss.write_row(0, 1, ["x"])
    with pytest.raises(PreconditionViolation):
        ss.write_column(0, 1, ["x"])
    assert(backend.calls == [])

def test_rename_sheet(ss, backend):
    ss.rename_sheet("Renamed")
    (_, _, request), = backend.named('batch_update')
    assert(request.to_base()['requests'] == [
        {'updateSheetProperties': {'properties': {'sheetId': 0, 'title': 'Renamed'},
                                   'fields': 'title'}}
    ])

def test_create_sheet():
    backend = FakeBackend(replies=[{'addSheet': {'properties': {'sheetId': 777, 'title': 'New',
                                                                'index': 2, 'sheetType': 'GRID'}}}])
    ss = GoogleSpreadSheet(backend, SPREADSHEET_ID)
    assert(ss.create_sheet("New") == 777)
    (_, _, request), = backend.named('batch_update')
    assert(request.to_base()['requests'] == [{'addSheet': {'properties': {'title': 'New'}}}])

@pytest.mark.parametrize("replies", [[], [{}], [{'addSheet': {}}], [{'addSheet': {'properties': {'title': 'New'}}}]])
def test_create_sheet_unexpected_reply(replies, caplog):
    ss = GoogleSpreadSheet(FakeBackend(replies=replies), SPREADSHEET_ID)
    assert(ss.create_sheet("New") is None)
    assert("no sheetId" in caplog.text)

def test_format_cell_background(ss, backend):
    ss.format_cell_background("Data", "B7", Color(red=1, green=0.5, blue=0))
    (_, _, request), = backend.named('batch_update')
    assert(request.to_base()['requests'] == [
        {'repeatCell': {
            'range': {'sheetId': 1234, 'startRowIndex': 6, 'endRowIndex': 7,
                      'startColumnIndex': 1, 'endColumnIndex': 2},
            'cell': {'userEnteredFormat': {'backgroundColor': {'red': 1.0, 'green': 0.5, 'blue': 0.0}}},
            'fields': 'userEnteredFormat(backgroundColor)'}}
    ])

def test_format_cell_background_first_sheet_and_dict(ss, backend):
    ss.format_cell_background("Sheet1", "A1", {'red': 0, 'green': 0, 'blue': 0, 'alpha': 1})
    (_, _, request), = backend.named('batch_update')
    repeat = request.to_base()['requests'][0]['repeatCell']
    assert(repeat['range'] == {'sheetId': 0, 'startRowIndex': 0, 'endRowIndex': 1,
                               'startColumnIndex': 0, 'endColumnIndex': 1})
    assert(repeat['cell']['userEnteredFormat']['backgroundColor'] ==
           {'red': 0.0, 'green': 0.0, 'blue': 0.0, 'alpha': 1.0})

def test_format_cell_background_unknown_sheet(ss, backend):
    with pytest.raises(NotFound):
        ss.format_cell_background("Nope", "A1", Color(red=1))
    assert(backend.named('batch_update') == [])

def test_format_cell_background_bad_address(ss, backend):
    with pytest.raises(InvalidInput):
        ss.format_cell_background("Data", "b7", Color(red=1))
    assert(backend.calls == [])

def test_bad_color():
    with pytest.raises(ValueError):
        Color(red=2)

def test_transport_failure_propagates(backend):
    def broken(spreadsheetId):
        raise TransportFailure("get_metadata", RuntimeError("boom"))
    backend.get_metadata = broken
    ss = GoogleSpreadSheet(backend, SPREADSHEET_ID)
    with pytest.raises(TransportFailure) as e:
        ss.format_cell_background("Data", "A1", Color(red=1))
    assert(e.value.operation == "get_metadata")
    assert(backend.named('batch_update') == [])
