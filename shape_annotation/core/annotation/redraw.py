"""
Frame-coalesced redraw scheduling.

Any number of redraw requests between two frames collapse into a single
render call. The pending flag is level-triggered: while a frame is queued
or rendering, further requests are dropped.
"""

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class RedrawScheduler:
    def __init__(
        self,
        render: Callable[[], None],
        request_frame: Optional[Callable[[Callable[[], None]], None]] = None,
    ):
        """
        Args:
            render: Called once per frame when a redraw is pending
            request_frame: Hook that arranges for its argument to run on the
                next frame. Defaults to an internal queue drained by
                :meth:`pump`.
        """
        self._render = render
        self._frame_queue: List[Callable[[], None]] = []
        self._request_frame = request_frame or self._frame_queue.append
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def request(self):
        if self._pending:
            return
        self._pending = True
        self._request_frame(self._run)

    def _run(self):
        try:
            self._render()
        finally:
            self._pending = False

    def pump(self) -> int:
        """Run queued frame callbacks; returns how many ran."""
        frames = list(self._frame_queue)
        self._frame_queue.clear()
        for frame in frames:
            frame()
        return len(frames)
