from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Ref(Generic[T]):
    """
    Mutable handle to a widget owned by someone else.
    Readers must treat `current` as possibly None (not built yet, or torn down).
    """
    current: Optional[T] = None
