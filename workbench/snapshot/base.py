from abc import ABC, abstractmethod


class SnapshotStore(ABC):
    """Base interface for snapshot backends.

    Implementations: LocalSnapshotStore (snapshots kept inside the project).
    """

    @abstractmethod
    def create(self, project_path, name):
        """Snapshot the project under name, replacing any snapshot of that name."""
        pass

    @abstractmethod
    def restore(self, project_path, name):
        """Replace the project's contents with the named snapshot."""
        pass

    @abstractmethod
    def list(self, project_path):
        """List the project's snapshots, oldest first."""
        pass
