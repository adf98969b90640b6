"""Error types raised by workbench actions.

Every failure an action can report is a WorkbenchError subclass, so the
dispatcher boundary can hand back both the message and the kind of failure.
"""


class WorkbenchError(Exception):
    """Base class for all action failures."""


class HomeDirectoryError(WorkbenchError):
    """The home directory is needed for a ~/ path but cannot be determined."""


class FileOperationError(WorkbenchError):
    """A filesystem create/read/write/delete step failed."""


class SnapshotNotFoundError(WorkbenchError):
    """The named snapshot does not exist in the project's store."""


class SpawnError(WorkbenchError):
    """An external process could not be started."""


class UnsupportedActionError(WorkbenchError):
    """The action name is not one the dispatcher knows."""


class ValidationError(WorkbenchError):
    """A payload field is malformed."""


class SnapshotNameError(ValidationError):
    """A snapshot name is empty or is not a single path segment."""


class UnknownProviderError(ValidationError):
    """The AI provider selector names no known agent."""


class ProjectLockedError(WorkbenchError):
    """Another action already holds the project's lock."""
