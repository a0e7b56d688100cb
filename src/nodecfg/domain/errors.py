"""Domain-specific exceptions for typed error handling at boundaries.

Every failure carries enough context (profile, path, address) to diagnose it
without a traceback. The CLI maps each type to an exit code; nothing here is
retried or swallowed.
"""

from __future__ import annotations

from collections.abc import Iterable


class NodeCfgError(Exception):
    """Base class for all nodecfg failures."""


class UnknownProfileError(NodeCfgError, LookupError):
    """Requested profile name is absent from the registry.

    Example:
        >>> err = UnknownProfileError("turbo", known=("server", "test"))
        >>> str(err)
        "No profile named 'turbo' (known: server, test)"
        >>> err.name
        'turbo'
    """

    def __init__(self, name: str, known: Iterable[str] = ()) -> None:
        self.name = name
        self.known = tuple(known)
        suffix = f" (known: {', '.join(self.known)})" if self.known else ""
        super().__init__(f"No profile named {name!r}{suffix}")


class MalformedValueError(NodeCfgError, ValueError):
    """A user-supplied value failed to parse under the requested type hint.

    Example:
        >>> print(MalformedValueError('{"bar:0}', "json", "unexpected end of data"))
        Invalid json value '{"bar:0}': unexpected end of data
    """

    def __init__(self, raw: str, kind: str, reason: str) -> None:
        self.raw = raw
        self.kind = kind
        self.reason = reason
        super().__init__(f"Invalid {kind} value {raw!r}: {reason}")


class MalformedDocumentError(NodeCfgError, ValueError):
    """The stored document cannot be transformed at the given path."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed configuration at {path!r}: {reason}")


class ProfileScopeError(NodeCfgError):
    """A profile transform changed fields it does not declare."""

    def __init__(self, profile: str, paths: Iterable[str]) -> None:
        self.profile = profile
        self.paths = tuple(paths)
        super().__init__(f"Profile {profile!r} touched undeclared fields: {', '.join(self.paths)}")


class StoreIOError(NodeCfgError):
    """The persisted document could not be read or written.

    Example:
        >>> str(StoreIOError("/repo/config", "read", "No such file or directory"))
        "Cannot read configuration '/repo/config': No such file or directory"
    """

    def __init__(self, location: str, operation: str, reason: str) -> None:
        self.location = location
        self.operation = operation
        self.reason = reason
        super().__init__(f"Cannot {operation} configuration {location!r}: {reason}")


class ConfigKeyNotFoundError(NodeCfgError, LookupError):
    """A dotted key path does not exist in the document."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Configuration key {path!r} not found")


class SensitiveFieldError(NodeCfgError, PermissionError):
    """Direct read or write of a sensitive field was requested."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Reading or changing {path!r} through the config command is not allowed")


class ResolutionFailedError(NodeCfgError):
    """Address indirection lookup failed.

    Example:
        >>> err = ResolutionFailedError("/dnsaddr/example.com", "no dnsaddr records")
        >>> str(err)
        "Cannot resolve '/dnsaddr/example.com': no dnsaddr records"
    """

    def __init__(self, address: str, cause: str) -> None:
        self.address = address
        self.cause = cause
        super().__init__(f"Cannot resolve {address!r}: {cause}")


class ResolutionTimeoutError(ResolutionFailedError):
    """Address resolution exceeded the caller's time budget."""

    def __init__(self, address: str, timeout: float | None) -> None:
        self.timeout = timeout
        budget = f"{timeout:g}s" if timeout is not None else "the lookup deadline"
        super().__init__(address, f"timed out after {budget}")


__all__ = [
    "ConfigKeyNotFoundError",
    "MalformedDocumentError",
    "MalformedValueError",
    "NodeCfgError",
    "ProfileScopeError",
    "ResolutionFailedError",
    "ResolutionTimeoutError",
    "SensitiveFieldError",
    "StoreIOError",
    "UnknownProfileError",
]
