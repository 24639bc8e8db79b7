"""
Errors
======
Exception hierarchy for the injection engine.

Only structural failures (invalid arguments, missing scope directory,
unknown language, unknown bug id) propagate to callers. Failures local to a
single file, template or candidate are represented by these types internally
but are caught and logged at the engine boundary.
"""


class HydraError(Exception):
    """Base class for all engine errors."""


class ParseError(HydraError):
    """Source text could not be parsed by a language adapter."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Cannot parse {filename or '<source>'}: {reason}")


class InjectionError(HydraError):
    """A template could not apply its mutation to the given point."""


class InvalidRequestError(HydraError):
    """Injection options or arguments are invalid."""


class ScopeNotFoundError(HydraError):
    """The scope directory to search for candidates does not exist."""


class UnsupportedLanguageError(InvalidRequestError):
    """No adapter is registered for the requested language."""


class BugNotFoundError(HydraError):
    """The requested injected bug id is not in the manifest."""

    def __init__(self, bug_id: str) -> None:
        self.bug_id = bug_id
        super().__init__(f'Bug "{bug_id}" not found in manifest.')


class NoActiveSessionError(HydraError):
    """No manifest exists (or it is unreadable) for a session-dependent operation."""

    def __init__(self) -> None:
        super().__init__("No active hydra session")
