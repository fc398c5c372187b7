"""unitylauncher exception hierarchy.

All public exceptions inherit from UnityLauncherError, giving callers a single
base class to catch when they want to handle any launcher-specific failure
without swallowing unrelated errors.

Most of these never escape ``reload()`` or ``query()``: they are raised by
the low-level readers and converted into warnings by the component that
owns the source.
"""


class UnityLauncherError(Exception):
    """Base exception for all unitylauncher errors."""


class SourceUnavailable(UnityLauncherError):
    """Raised when a data source cannot be read at all.

    Covers missing or unreadable root directories, Hub JSON files,
    registry keys, plist files and prefs files. The owning component
    degrades the source to empty and emits a warning.
    """


class MalformedRecord(UnityLauncherError):
    """Raised when a single record cannot be parsed.

    Covers a ``ProjectVersion.txt`` without an editor version line,
    undecodable bytes, and list files whose JSON is not a list of strings.
    Only the offending record is dropped.
    """


class LaunchFailure(UnityLauncherError):
    """Raised when the OS refuses to start an editor or the Hub."""


class QueryCancelled(UnityLauncherError):
    """Raised when a search is abandoned through its cancellation event."""


class ConfigError(UnityLauncherError):
    """Raised when the user configuration file is malformed.

    Covers invalid YAML, a top-level value that is not a mapping, and
    fields with the wrong type.
    """
