"""Run-scoped registry of emitted statement names."""


class NameRegistry:
    """Names already emitted during one generation run.

    A fresh registry is created for every top-level call and passed to the
    generator explicitly.
    """

    def __init__(self) -> None:
        self._names: set[str] = set()

    def register(self, name: str) -> bool:
        """Record a name.

        Returns:
            True if the name was new, False if it had already been registered
        """
        if name in self._names:
            return False
        self._names.add(name)
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)
