# -*- coding: utf-8; -*-
"""Colorize terminal output, using Colorama. Works on any OS."""

__all__ = ["setcolor", "colorize", "ColorScheme",
           "Fore", "Back", "Style"]

from colorama import Back, Fore, Style  # type: ignore[import]
from colorama import just_fix_windows_console  # type: ignore[import]

just_fix_windows_console()


def setcolor(*colors, reset=True):
    """Set color for terminal display.

    Returns a string that, when printed into a terminal, sets the style
    and color.

    If `reset=True`, reset style and color before setting the requested
    style and color. If `reset=False`, augment current style and color.

    For available `colors`, see `Fore`, `Back` and `Style`. Each entry can
    also be a tuple (arbitrarily nested), for compound styles.

    **CAUTION**: The style stays in effect until the next `setcolor`.
    To reset, use `setcolor()`. To colorize just a piece of text, use
    `colorize` instead.
    """
    def _setcolor(color):
        if isinstance(color, (list, tuple)):
            return "".join(_setcolor(elt) for elt in color)
        return color
    out = [_setcolor(Style.RESET_ALL)] if reset else []
    out.append(_setcolor(colors))
    return "".join(out)


def colorize(text, *colors):
    """Colorize string `text` for terminal display.

    Always reset style and color at the start of `text`, as well as after it.

    Usage::

        print(colorize("I'm new here", Fore.GREEN))
        print(colorize("I'm bold and bluetiful", Style.BRIGHT, Fore.BLUE))

    **CAUTION**: Does not nest.
    """
    return "{}{}{}".format(setcolor(colors),
                           text,
                           setcolor())


class ColorScheme:
    """The color scheme for terminal output in `quosure`'s debug utilities and test runner.

    This is just a bunch of constants. To change the colors, simply assign new
    values to them. Changes take effect immediately for any new output.

    Don't replace the color scheme object itself; all the use sites
    from-import it.

    See `Fore`, `Back`, `Style` for valid values. To make a compound style,
    place the values into a tuple.
    """
    def __init__(self):
        # ------------------------------------------------------------
        # unparse

        self.SYMBOL = Style.BRIGHT
        self.OPERATOR = (Style.BRIGHT, Fore.YELLOW)  # +, and, getattr rendered as `.`, ...
        self.LITERAL = Fore.GREEN
        self.CALLEE = (Style.BRIGHT, Fore.CYAN)
        self.ARGNAME = Fore.LIGHTBLUE_EX
        self.MARKER = (Style.BRIGHT, Fore.MAGENTA)  # UQ, UQS, :=
        self.QUOTE = Fore.BLUE  # the `^` of a nested scoped quote

        # ------------------------------------------------------------
        # step_expansion

        self.HEADING1 = (Style.BRIGHT, Fore.LIGHTBLUE_EX)
        self.HEADING2 = Fore.LIGHTBLUE_EX
        self.ATTENTION = (Style.BRIGHT, Fore.GREEN)
        self.GREYEDOUT = Style.DIM

        # ------------------------------------------------------------
        # dump

        self.NODETYPE = (Style.BRIGHT, Fore.LIGHTBLUE_EX)
        self.FIELDNAME = Fore.YELLOW
        self.BAREVALUE = Fore.GREEN

        # ------------------------------------------------------------
        # runtests

        self.TESTHEADING = self.HEADING1
        self.TESTPASS = (Style.BRIGHT, Fore.GREEN)
        self.TESTFAIL = (Style.BRIGHT, Fore.RED)
        self.TESTERROR = (Style.BRIGHT, Fore.YELLOW)
ColorScheme = ColorScheme()  # type: ignore[assignment, misc]
