from criterion_table.util import ReadableException


class CriterionTableError(ReadableException):
    pass


class InputParseError(CriterionTableError):
    def __init__(self, message, line=None, cause=None):
        self.line = line
        super(InputParseError, self).__init__(message, cause)

    def __str__(self):
        base = super(InputParseError, self).__str__()
        if self.line is None:
            return base
        return f"line {self.line}: {base}"


class BuildError(CriterionTableError):
    pass


class MalformedIdentifierError(BuildError):
    def __init__(self, identifier):
        self.identifier = identifier
        super(MalformedIdentifierError, self).__init__(f"Malformed id: {identifier}")


class UnrecognizedTimeUnitError(BuildError):
    def __init__(self, unit):
        self.unit = unit
        super(UnrecognizedTimeUnitError, self).__init__(f"Unrecognized time unit: {unit}")


class DuplicateColumnError(BuildError):
    def __init__(self, column, row="", table=None):
        self.column = column
        self.row = row
        self.table = table
        message = f"Duplicate column: {column}"
        if table is not None:
            message += f" (table={table!r}, row={row!r})"
        super(DuplicateColumnError, self).__init__(message)


class ConfigParseError(CriterionTableError):
    def __init__(self, path, error_kind, cause=None):
        self.path = path
        self.error_kind = error_kind
        super(ConfigParseError, self).__init__(
            f"Unable to load tables config {path} ({error_kind})",
            cause,
        )
