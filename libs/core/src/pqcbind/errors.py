from __future__ import annotations

"""Exception hierarchy.

Every failure the binding reports derives from :class:`PQCBindError` and from
the builtin exception a Python caller would expect for the same situation, so
``except TypeError`` keeps working for argument errors.
"""


class PQCBindError(Exception):
    pass


class InvalidArgumentError(PQCBindError, TypeError):
    """Wrong type, or a required argument passed as ``None``."""


class InvalidLengthError(PQCBindError, ValueError):
    """A byte buffer of the right type but the wrong size."""

    def __init__(self, field: str, expected: str, actual: int) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"{field} must be {expected}, got {actual} bytes")


class UnsupportedAlgorithmError(PQCBindError, ValueError):
    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} algorithm {name!r} is unknown or not enabled")


class PreconditionFailedError(PQCBindError, RuntimeError):
    """The handle is not in a state that allows the operation."""


class CryptoOperationFailedError(PQCBindError, RuntimeError):
    """liboqs reported a failure status."""


class LibraryNotFoundError(PQCBindError, RuntimeError):
    pass
