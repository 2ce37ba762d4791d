"""Fresh identifier generation for synthetic rules."""

from collections import defaultdict


class NameGenerator:
    """
    Produces unique names of the form ``<prefix>_<k>``.

    Each prefix has its own counter starting at 0. Counters only move
    forward, so a name is never handed out twice by the same instance.
    """

    def __init__(self) -> None:
        self._counters: defaultdict[str, int] = defaultdict(int)

    def fresh(self, prefix: str) -> str:
        """Return the next unused name for ``prefix``."""
        k = self._counters[prefix]
        self._counters[prefix] = k + 1
        return f"{prefix}_{k}"
