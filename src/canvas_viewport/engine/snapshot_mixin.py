"""Snapshot mixin: persistable capture and restore of the view state."""

from canvas_viewport.models.transform import Snapshot


class EngineSnapshotMixin:
    """Mixin providing the snapshot API.

    Requires from the engine:
    - self._state, self._snapshot (cache, cleared by _commit)
    - self._commit(scale, offset, reason)
    """

    def get_snapshot(self) -> Snapshot:
        """Immutable capture of {scale, offset}.

        Repeated calls without a mutation in between return the same object,
        so consumers can detect change by identity.
        """
        if self._snapshot is None:
            self._snapshot = self._state.to_snapshot()
        return self._snapshot

    def load_from_snapshot(self, snapshot):
        """Overwrite scale and offset from a Snapshot (or its dict form).

        Loading the current state is a no-op. Invalid data raises
        ValueError and leaves the state untouched.

        Returns:
            True if the view changed
        """
        if isinstance(snapshot, dict):
            snapshot = Snapshot.from_dict(snapshot)
        elif not isinstance(snapshot, Snapshot):
            raise TypeError(f"Expected Snapshot or dict, got {type(snapshot).__name__}")
        return self._commit(snapshot.scale, snapshot.offset, "load_from_snapshot")

    def snapshot_to_json(self) -> str:
        return self.get_snapshot().to_json()

    def load_from_json(self, text):
        return self.load_from_snapshot(Snapshot.from_json(text))
