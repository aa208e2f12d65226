"""
Errors raised by gwsheets.

Everything derives from GWSheetsError so a caller can catch the lot, and
each class also derives from the closest builtin so code that only knows
about ValueError/LookupError/etc still does the right thing.
"""

class GWSheetsError(Exception):
    """Base for all gwsheets errors"""
    pass

class InvalidInput(GWSheetsError, ValueError):
    """Malformed cell address, column letters or range string"""
    pass

class PreconditionViolation(GWSheetsError, AssertionError):
    """
    Caller broke a contract, like asking for the address of row 0.
    This is a programming error, don't catch it to carry on.
    """
    pass

class NotFound(GWSheetsError, LookupError):
    """A sheet title didn't resolve to a sheet in the spreadsheet"""
    pass

class NumericOverflow(GWSheetsError, OverflowError):
    """Parsed row or column is past what the Sheets API can index"""
    pass

class ConfigurationError(GWSheetsError):
    """Missing settings or unusable credentials file"""
    pass

class TransportFailure(GWSheetsError):
    """
    A call to the Sheets service failed, be it network, auth or a
    rejected request.  The original exception is chained as __cause__.
    """
    def __init__(self, operation: str, cause: BaseException|None = None) -> None:
        self.operation = operation
        self.cause = cause
        msg = f"{operation} failed"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
