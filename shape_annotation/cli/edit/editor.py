"""Interactive editor window on top of OpenCV HighGUI."""

import logging
from gettext import gettext as _

import cv2

from shape_annotation.config import load_config
from shape_annotation.core.annotation import EditSession
from shape_annotation.interfaces import GUIAnnotationAdapter

logger = logging.getLogger(__name__)

WINDOW_NAME = "shape_annotation"

HELP = _(
    "d/e/x/t: draw/edit/delete/text  c: close  z/y: undo/redo  "
    "g/u: group/ungroup  p: duplicate  s: snap  r: grid  n: clear  q: quit"
)


def _mouse_callback(adapter: GUIAnnotationAdapter):
    def on_mouse(event, x, y, flags, _param):  # pragma: no cover
        if event == cv2.EVENT_LBUTTONDOWN:
            adapter.on_mouse_down(x, y, additive=bool(flags & cv2.EVENT_FLAG_SHIFTKEY))
        elif event == cv2.EVENT_MOUSEMOVE:
            adapter.on_mouse_move(x, y)
        elif event == cv2.EVENT_LBUTTONUP:
            adapter.on_mouse_up()
        elif event == cv2.EVENT_MOUSEWHEEL:
            # OpenCV reports positive deltas for scrolling up
            adapter.on_wheel(-cv2.getMouseWheelDelta(flags))

    return on_mouse


def handle(args):  # pragma: no cover
    session = EditSession(load_config())
    adapter = GUIAnnotationAdapter(session, canvas_size=(args.height, args.width))
    if args.snap:
        adapter.toggle_view_option("snap_to_grid")

    cv2.namedWindow(WINDOW_NAME)
    cv2.setMouseCallback(WINDOW_NAME, _mouse_callback(adapter))
    print(HELP)

    # First frame
    adapter.scheduler.request()
    while True:
        adapter.pump()
        if adapter.image is not None:
            cv2.imshow(WINDOW_NAME, adapter.image)
            cv2.setWindowTitle(WINDOW_NAME, adapter.status_line())
        key = cv2.waitKey(16) & 0xFF
        if key == 255:
            continue
        char = chr(key)
        if char == "q" or key == 27:
            break
        if not adapter.handle_key(char):
            logger.debug(f"Unbound key {char!r}")
    cv2.destroyAllWindows()
