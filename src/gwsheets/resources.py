from dataclasses import asdict

class GoogleWorkSpaceResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Subclasses with nested dataclass fields do their conversions in fixup().
    """
    def to_base(self) -> dict:
        """
        Default just return the dict representation of the object as needed by
        the GWS client.  Something more complicated can override.
        Call fixup() first to ensure all fields are in correct format.
        """
        self.fixup()
        return asdict(self)

    def trim(self) -> dict:
        """
        Return a 'trimmed' dict of the resource, recursively dropping any
        attributes that are None or empty.  Numbers and bools are kept even
        when falsy since 0 and False are legitimate values.
        The Sheets API treats a present-but-empty field as 'set this to empty'
        so requests should only carry what the caller actually filled in.
        """
        return _trim(self.to_base())

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass

def _trim(value):
    if isinstance(value, dict):
        trimmed = {}
        for k,v in value.items():
            v = _trim(v)
            if v is None or (type(v) not in [int,bool,float] and not v):
                continue
            trimmed[k] = v
        return trimmed
    if isinstance(value, list):
        return [_trim(v) for v in value]
    return value
