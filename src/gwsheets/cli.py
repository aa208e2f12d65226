from functools import wraps
import logging

import click

from .access import open_spreadsheet
from .config import load_settings
from .exceptions import GWSheetsError
from .sheets.a1 import split_range

logger = logging.getLogger(__name__)

def _handle_errors(f):
    """Report library errors as a one line message and exit 1"""
    @wraps(f)
    def wrapped(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except GWSheetsError as e:
            logger.debug("command failed", exc_info=True)
            raise click.ClickException(str(e)) from e
    return wrapped

def _spreadsheet(ctx: click.Context):
    """Connect on first use, so --help and bad arguments never need credentials"""
    if ctx.obj.get('spreadsheet') is None:
        settings = load_settings(spreadsheet_id=ctx.obj['spreadsheet_id'],
                                 key_path=ctx.obj['key_path'])
        ctx.obj['spreadsheet'] = open_spreadsheet(settings)
    return ctx.obj['spreadsheet']

@click.group()
@click.option('--spreadsheet-id', help='Spreadsheet ID, overrides SPREADSHEET_ID')
@click.option('--key-path', type=click.Path(dir_okay=False), help='Credentials json, overrides KEY_PATH')
@click.option('--verbose', '-v', is_flag=True, help='Log requests to stderr')
@click.pass_context
def cli(ctx, spreadsheet_id, key_path, verbose):
    """Read and write a Google Sheets spreadsheet."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s %(name)s %(levelname)s %(message)s')
    ctx.ensure_object(dict)
    ctx.obj.setdefault('spreadsheet_id', spreadsheet_id)
    ctx.obj.setdefault('key_path', key_path)

@cli.command()
@click.pass_context
@_handle_errors
def sheets(ctx):
    """List sheet IDs and titles."""
    for p in _spreadsheet(ctx).sheets():
        click.echo(f"{p.sheetId}\t{p.title}")

@cli.command()
@click.argument('range')
@click.pass_context
@_handle_errors
def read(ctx, range):
    """Print RANGE as tab separated rows."""
    for row in _spreadsheet(ctx).read_range(range):
        click.echo("\t".join(row))

@cli.command()
@click.argument('range')
@click.argument('values', nargs=-1, required=True)
@click.pass_context
@_handle_errors
def append(ctx, range, values):
    """Append one row of VALUES after the table in RANGE."""
    _spreadsheet(ctx).append_rows(range, [list(values)])

@cli.command('write-row')
@click.argument('row', type=click.IntRange(min=1))
@click.argument('start_col', type=click.IntRange(min=1))
@click.argument('values', nargs=-1, required=True)
@click.option('--sheet', default="", help='Sheet title, defaults to the first sheet')
@click.pass_context
@_handle_errors
def write_row(ctx, row, start_col, values, sheet):
    """Write VALUES across ROW starting at column START_COL."""
    _spreadsheet(ctx).write_row(row, start_col, values, sheet)

@cli.command('write-column')
@click.argument('col', type=click.IntRange(min=1))
@click.argument('start_row', type=click.IntRange(min=1))
@click.argument('values', nargs=-1, required=True)
@click.option('--sheet', default="", help='Sheet title, defaults to the first sheet')
@click.pass_context
@_handle_errors
def write_column(ctx, col, start_row, values, sheet):
    """Write VALUES down COL starting at row START_ROW."""
    _spreadsheet(ctx).write_column(col, start_row, values, sheet)

@cli.command('create-sheet')
@click.argument('title')
@click.pass_context
@_handle_errors
def create_sheet(ctx, title):
    """Add a sheet called TITLE and print its ID."""
    sheet_id = _spreadsheet(ctx).create_sheet(title)
    if sheet_id is None:
        raise click.ClickException(f"sheet {title!r} created but no ID was returned")
    click.echo(sheet_id)

@cli.command('rename-sheet')
@click.argument('title')
@click.option('--sheet-id', type=int, default=0, show_default=True, help='ID of the sheet to rename')
@click.pass_context
@_handle_errors
def rename_sheet(ctx, title, sheet_id):
    """Rename a sheet to TITLE."""
    _spreadsheet(ctx).rename_sheet(title, sheet_id)

@cli.command()
@click.argument('cell')
@click.argument('red', type=click.FloatRange(0, 1))
@click.argument('green', type=click.FloatRange(0, 1))
@click.argument('blue', type=click.FloatRange(0, 1))
@click.pass_context
@_handle_errors
def color(ctx, cell, red, green, blue):
    """Set the background of CELL, like 'Sheet1!B3', to RED GREEN BLUE (0-1)."""
    title, start, end = split_range(cell)
    if not title or end:
        raise click.BadParameter("must be a single cell with a sheet title, like Sheet1!B3", param_hint='CELL')
    _spreadsheet(ctx).format_cell_background(title, start, {'red': red, 'green': green, 'blue': blue})

def main():
    cli(obj={})

if __name__ == '__main__':
    main()
