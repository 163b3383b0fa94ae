class _State:
    """Structural version counter of a GraphStore plus its backend cache.

    Every node or edge insertion and deletion bumps ``version``; cached
    backend graphs remember the version they were built from and are rebuilt
    once the store has moved on. Attribute writes do not bump the version
    because backend graphs only carry structure.
    """

    def __init__(self):
        self.version = 0
        self._backend_cache = {}

    def bump(self) -> int:
        self.version += 1
        return self.version

    def dirty_since(self, version: int) -> bool:
        return self.version > version

    def clear_cache(self) -> None:
        self._backend_cache.clear()
