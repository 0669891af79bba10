"""Error types for gstat."""


class GstatError(Exception):
    """Base error for gstat."""


class NotFoundError(GstatError):
    """No git metadata entry reachable from the start directory."""


class IoError(GstatError):
    """A file that must exist could not be read."""


class ParseError(GstatError):
    """Status output did not match the porcelain grammar."""
