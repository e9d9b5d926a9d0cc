import logging
from gettext import gettext as _

import cv2

from shape_annotation.config import load_config
from shape_annotation.core.annotation import EditSession, EditMode, IN_PROGRESS
from shape_annotation.core.annotation import commands as cmd
from shape_annotation.interfaces import GUIAnnotationAdapter

logger = logging.getLogger(__name__)


def build_demo(session: EditSession):
    """Draw two polygons and a caption through the command API."""
    apply = session.apply

    apply(cmd.SetMode(EditMode.DRAW))
    for x, y in [(100, 100), (300, 100), (200, 260)]:
        apply(cmd.PointerDown(x, y))
        apply(cmd.PointerUp())
    apply(cmd.ClosePolygon())

    for x, y in [(420, 120), (620, 120), (620, 320), (420, 320)]:
        apply(cmd.PointerDown(x, y))
        apply(cmd.PointerUp())
    apply(cmd.ClosePolygon())

    for x, y in [(120, 420), (260, 480), (400, 420)]:
        apply(cmd.PointerDown(x, y))
        apply(cmd.PointerUp())
    apply(cmd.EditEdgeProperty(IN_PROGRESS, 0, "label_override", "a"))
    apply(cmd.EditAngleProperty(IN_PROGRESS, 1, "fan_position", 1.0))

    apply(cmd.SetMode(EditMode.TEXT))
    apply(cmd.PointerDown(520, 380))
    apply(cmd.PointerUp())
    apply(cmd.EditText(0, "content", "square"))

    # Select the square and its caption, then group them
    apply(cmd.SetMode(EditMode.EDIT))
    apply(cmd.PointerDown(520, 220))
    apply(cmd.PointerUp())
    apply(cmd.PointerDown(520, 380, additive=True))
    apply(cmd.PointerUp())
    apply(cmd.GroupSelection())

    # Drag the group and bend one triangle edge
    apply(cmd.PointerDown(520, 220))
    apply(cmd.PointerMove(540, 200))
    apply(cmd.PointerUp())

    # Default control of the top edge sits 30 below its midpoint
    apply(cmd.PointerDown(200, 130))
    apply(cmd.PointerMove(200, 160))
    apply(cmd.PointerUp())


def handle(args):
    session = EditSession(load_config())
    adapter = GUIAnnotationAdapter(session, canvas_size=(args.height, args.width))

    build_demo(session)
    for _step in range(abs(args.zoom_steps)):
        adapter.on_wheel(-1 if args.zoom_steps > 0 else 1)
    if args.show_grid:
        adapter.toggle_view_option("show_grid")

    adapter.pump()
    image = adapter.get_visualization()
    if not cv2.imwrite(str(args.output), image):
        raise RuntimeError(_("Could not write {path}").format(path=args.output))
    logger.info(
        _("Wrote {path} ({polygons} polygons, {texts} texts)").format(
            path=args.output,
            polygons=len(session.document.polygons),
            texts=len(session.document.texts),
        )
    )
