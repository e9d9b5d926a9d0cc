# flake8: noqa E501

from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Build a sample drawing and render it to an image")


def command(subparser):
    subparser.add_argument("output", type=Path, help=_("Image file to write"))
    subparser.add_argument("--width", dest="width", type=int, default=800)
    subparser.add_argument("--height", dest="height", type=int, default=600)
    subparser.add_argument(
        "--zoom", dest="zoom_steps", type=int, default=0,
        help=_("Wheel steps to zoom in (negative zooms out)"),
    )
    subparser.add_argument("--grid", dest="show_grid", action="store_true")

    def handle(args):
        from .demo import handle as demo_handle

        demo_handle(args)

    return handle
