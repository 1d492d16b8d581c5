"""Errors raised while analysing an archive.

Every error is fatal for the run; the CLI turns them into a one-line
message on stderr and exit status 1.
"""


class AnalyserError(Exception):
    """Base class for archive analyser errors."""
    pass


class ArgumentError(AnalyserError):
    """Bad command-line usage."""
    pass


class FileAccessError(AnalyserError):
    """Input file missing/unreadable, or report destination unwritable."""
    pass


class FormatError(AnalyserError):
    """File is not in the expected wrapped-literal format."""
    pass


class ParseError(AnalyserError):
    """Wrapped literal does not parse, decodes to nothing, or has the wrong shape."""
    pass
