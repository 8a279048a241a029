"""
Tab-order focus tracking.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .controls import Control

logger = logging.getLogger(__name__)


class FocusEngine:
    """
    Tracks which control has focus and moves it in tab-index order.

    Controls without a tab index are never focused. Tab indices need not be
    contiguous; movement always goes to the nearest present index.

    Example:
        >>> engine = FocusEngine(controls)
        >>> engine.reset()
        >>> engine.next()
    """

    def __init__(self, controls: Sequence[Control] = ()):
        self._order: List[Control] = []
        self.focused: Optional[Control] = None
        self.set_controls(controls)

    def set_controls(self, controls: Sequence[Control]) -> None:
        indexed = [c for c in controls if c.get_tab_index() is not None]
        # stable sort keeps insertion order for equal indices
        self._order = sorted(indexed, key=lambda c: c.get_tab_index())
        if self.focused is not None and self.focused not in self._order:
            self.focused = None

    @property
    def order(self) -> List[Control]:
        return list(self._order)

    def initial(self) -> Optional[Control]:
        return self._order[0] if self._order else None

    def reset(self) -> Optional[Control]:
        self.focused = self.initial()
        return self.focused

    def has_focus(self, control: Control) -> bool:
        return control is self.focused

    def _step(self, delta: int) -> Optional[Control]:
        if not self._order:
            return None
        if self.focused is None:
            return self.reset()
        # the order is sorted by tab index, so neighbours are the nearest present indices
        i = self._order.index(self.focused)
        self.focused = self._order[(i + delta) % len(self._order)]
        logger.debug("focus -> %r (tab %s)", self.focused.get_name(), self.focused.get_tab_index())
        return self.focused

    def next(self) -> Optional[Control]:
        """Move to the next larger tab index, wrapping to the lowest."""
        return self._step(1)

    def previous(self) -> Optional[Control]:
        """Move to the next smaller tab index; from the lowest, jump to the highest."""
        return self._step(-1)
