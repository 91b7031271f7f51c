"""Scope frames for open JSON containers."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import StructuralError


@dataclass(slots=True)
class ArrayState:
    element_name: str
    size: int = 0


@dataclass(slots=True)
class Scope:
    """One open JSON object (or the synthetic root).

    ``pending_tag_name`` is the last field name read in this object that is
    still waiting for its value.  ``array`` is set while a JSON array value
    of this object is being mapped onto repeated elements.
    """

    is_root: bool = False
    pending_tag_name: str | None = None
    array: ArrayState | None = None

    @property
    def is_array(self) -> bool:
        return self.array is not None

    def start_array(self, element_name: str) -> None:
        if self.array is not None:
            raise StructuralError("Array start inside array")
        self.array = ArrayState(element_name)

    def inc_array_size(self) -> None:
        self.array.size += 1

    def end_array(self) -> None:
        if self.array is None:
            raise StructuralError("Array end without matching start")
        self.array = None

    def clear(self) -> None:
        self.pending_tag_name = None
        self.array = None


class ScopeStack:
    """Stack of :class:`Scope` frames indexed by nesting depth.

    Frames above the current depth are kept and cleared on reuse, so deep
    documents do not allocate a frame per element.
    """

    def __init__(self) -> None:
        self._frames: list[Scope] = [Scope(is_root=True)]
        self._depth = 0

    def __len__(self) -> int:
        return self._depth + 1

    def push(self) -> Scope:
        """Open a fresh frame on top of the current one and return it."""
        self._depth += 1
        if self._depth == len(self._frames):
            self._frames.append(Scope())
        else:
            self._frames[self._depth].clear()
        return self._frames[self._depth]

    def pop(self) -> Scope:
        if self._depth == 0:
            raise RuntimeError("cannot pop the root scope")
        frame = self._frames[self._depth]
        self._depth -= 1
        return frame

    def current(self) -> Scope:
        return self._frames[self._depth]

    def is_root_and_current(self) -> bool:
        return self._depth == 0
