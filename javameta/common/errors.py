from typing import Any, NamedTuple


class JavaMetaError(Exception):
    pass


class VersionFormatError(JavaMetaError, ValueError):
    """Raised for a Java version (or version range) that matches no known notation."""

    def __init__(self, value: str, reason: str | None = None):
        self.value = value
        msg = f"Unrecognised Java version {value!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class SchemaInconsistency(JavaMetaError, ValueError):
    """
    The document is well formed but contradicts itself, e.g. a suggested major
    outside the supported range or a RAM minimum above the recommended amount.
    """


class InvalidScopeIgnored(NamedTuple):
    entry: Any
    message: str
