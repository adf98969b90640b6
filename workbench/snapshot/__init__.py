from workbench.snapshot.local import LocalSnapshotStore, STORE_DIRNAME


def create_snapshot_store(config=None):
    """Create a snapshot store from config.

    Config keys:
        snapshot_backend: "local" (default)
    """
    config = config or {}
    backend = config.get("snapshot_backend", "local")

    if backend == "local":
        return LocalSnapshotStore()

    raise ValueError(f"Unknown snapshot backend: {backend!r}. Use 'local'.")


__all__ = ["LocalSnapshotStore", "STORE_DIRNAME", "create_snapshot_store"]
