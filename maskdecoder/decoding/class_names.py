"""Lookup table from class ids to human-readable names."""

from typing import Iterable, Iterator, List


class ClassNames:
    """
    Ordered class-name table indexed by class id.

    Ids past the end of the table resolve to ``"unknown <id>"`` instead of
    failing, since networks are routinely paired with shorter label files.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: List[str] = [str(name) for name in names]

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __getitem__(self, class_id: int) -> str:
        return self.resolve(class_id)

    def resolve(self, class_id: int) -> str:
        """Get the name of a class, or a synthesized label if unknown."""
        if 0 <= class_id < len(self._names):
            return self._names[class_id]
        return f"unknown {class_id}"

    def as_list(self) -> List[str]:
        """Copy of the underlying names."""
        return list(self._names)
