# flake8: noqa E501

from gettext import gettext as _

COMMAND_DESCRIPTION = _("Open an interactive editing window")


def command(subparser):
    subparser.add_argument("--width", dest="width", type=int, default=1000)
    subparser.add_argument("--height", dest="height", type=int, default=700)
    subparser.add_argument("--snap", dest="snap", action="store_true", help=_("Snap to the grid"))

    def handle(args):
        from .editor import handle as editor_handle

        editor_handle(args)

    return handle
