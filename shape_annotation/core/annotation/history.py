"""
Snapshot based undo/redo.

Every entry is an independent clone of the whole document, so later
mutations of the live document never leak into stored history.
"""

import logging
from typing import List, Optional

from .state import Document

logger = logging.getLogger(__name__)


class HistoryManager:
    """
    Undo and redo stacks of document snapshots.

    Callers commit the document as it was *before* an action; undoing then
    returns that snapshot and parks the live state on the redo stack.
    """

    def __init__(self, max_history: int = 100):
        """
        Initialize history.

        Args:
            max_history: Number of undo entries kept; the oldest are dropped
        """
        self.max_history = max_history
        self._undo_stack: List[Document] = []
        self._redo_stack: List[Document] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def commit(self, document: Document):
        """Store a snapshot of ``document`` and discard pending redo entries."""
        self._undo_stack.append(document.clone())
        self._redo_stack.clear()
        if len(self._undo_stack) > self.max_history:
            self._undo_stack.pop(0)
        logger.debug(f"History commit, {len(self._undo_stack)} undo entries")

    def undo(self, current: Document) -> Optional[Document]:
        """
        Step back one entry.

        Args:
            current: Live document, parked on the redo stack

        Returns:
            Document to install, or None if there is nothing to undo
        """
        if not self._undo_stack:
            return None
        self._redo_stack.append(current.clone())
        return self._undo_stack.pop().clone()

    def redo(self, current: Document) -> Optional[Document]:
        """Symmetric to :meth:`undo`."""
        if not self._redo_stack:
            return None
        self._undo_stack.append(current.clone())
        return self._redo_stack.pop().clone()

    def clear(self):
        self._undo_stack.clear()
        self._redo_stack.clear()
