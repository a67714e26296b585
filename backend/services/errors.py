# backend/services/errors.py


class CsvViewerError(Exception):
    pass


class MissingFieldError(CsvViewerError):
    """
    Raised when the upload form carries no file in the expected field.
    """

    def __init__(self, field: str):
        super().__init__(f"No file submitted in form field '{field}'")
        self.field = field


class EmptyFileError(CsvViewerError):
    """
    Raised when a CSV source has no header line at all.
    """


class MalformedRowError(CsvViewerError):
    def __init__(self, message: str, line_num: int):
        super().__init__(f"line {line_num}: {message}")
        self.line_num = line_num


class CsvDecodeError(CsvViewerError):
    pass
