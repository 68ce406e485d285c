#! /usr/bin/env python3

"""
Built-in color palettes. Colors are (r, g, b) tuples.
"""

from dataclasses import dataclass

from rich.color import Color
from rich.style import Style

from .data_structures import TokenKind

__all__ = ["Theme", "THEMES", "richStyle"]


##
## Color theme.
##
## @class Theme
##
@dataclass(frozen=True)
class Theme:
    name: str

    # Backgrounds: file tree and status bar on the left, editor and terminal on the right
    background_left: tuple
    background_right: tuple

    editor_line_number: tuple
    editor_line_number_cursor: tuple
    editor_separator: tuple
    editor_cursor_char_bg: tuple
    editor_cursor_char_fg: tuple
    editor_cursor_line_bg: tuple

    file_tree_added: tuple
    file_tree_deleted: tuple
    file_tree_modified: tuple
    file_tree_renamed: tuple
    file_tree_directory: tuple
    file_tree_current_file_bg: tuple
    file_tree_current_file_fg: tuple
    file_tree_default: tuple
    file_tree_stats_added: tuple
    file_tree_stats_deleted: tuple

    terminal_command: tuple
    terminal_output: tuple
    terminal_cursor_bg: tuple
    terminal_cursor_fg: tuple

    status_hash: tuple
    status_author: tuple
    status_date: tuple
    status_message: tuple
    status_no_commit: tuple

    separator: tuple

    # TokenKind to color
    syntax: dict

    def __post_init__(self):
        missing = [ kind.value for kind in TokenKind if kind not in self.syntax ]
        if missing:
            raise ValueError("theme {} has no color for {}".format(self.name, ", ".join(missing)))

    ##
    ## Color of a token kind; None stands for plain text.
    ##
    def tokenColor( self, kind ):
        if kind is None:
            return self.syntax[TokenKind.VARIABLE]
        return self.syntax[kind]

    @classmethod
    def byName( cls, name ):
        try:
            return THEMES[name]
        except KeyError:
            raise KeyError("unknown theme {!r}, available: {}".format(name, ", ".join(sorted(THEMES)))) from None


def _syntax( keyword, type, function, variable, string, number, comment,
             operator, punctuation, constant, parameter, property, label ):
    return {
        TokenKind.KEYWORD: keyword,
        TokenKind.TYPE: type,
        TokenKind.FUNCTION: function,
        TokenKind.VARIABLE: variable,
        TokenKind.STRING: string,
        TokenKind.NUMBER: number,
        TokenKind.COMMENT: comment,
        TokenKind.OPERATOR: operator,
        TokenKind.PUNCTUATION: punctuation,
        TokenKind.CONSTANT: constant,
        TokenKind.PARAMETER: parameter,
        TokenKind.PROPERTY: property,
        TokenKind.LABEL: label,
    }


def _tokyoNight():
    fg = (192, 202, 245)
    muted = (86, 95, 137)
    blue = (122, 162, 247)
    cyan = (125, 207, 255)
    green = (158, 206, 106)
    red = (247, 118, 142)
    orange = (255, 158, 100)
    yellow = (255, 213, 128)
    purple = (187, 154, 247)
    base = (26, 27, 38)
    line = (42, 47, 68)
    return Theme(
        name="tokyo-night",
        background_left=(30, 34, 54),
        background_right=base,
        editor_line_number=muted,
        editor_line_number_cursor=cyan,
        editor_separator=muted,
        editor_cursor_char_bg=blue,
        editor_cursor_char_fg=base,
        editor_cursor_line_bg=line,
        file_tree_added=green,
        file_tree_deleted=red,
        file_tree_modified=orange,
        file_tree_renamed=blue,
        file_tree_directory=blue,
        file_tree_current_file_bg=line,
        file_tree_current_file_fg=fg,
        file_tree_default=fg,
        file_tree_stats_added=green,
        file_tree_stats_deleted=red,
        terminal_command=fg,
        terminal_output=muted,
        terminal_cursor_bg=blue,
        terminal_cursor_fg=base,
        status_hash=yellow,
        status_author=green,
        status_date=blue,
        status_message=fg,
        status_no_commit=muted,
        separator=muted,
        syntax=_syntax(keyword=purple, type=cyan, function=blue, variable=fg,
                       string=green, number=orange, comment=muted, operator=cyan,
                       punctuation=(140, 148, 184), constant=orange, parameter=yellow,
                       property=green, label=purple),
    )


def _dracula():
    fg = (248, 248, 242)
    comment = (98, 114, 164)
    cyan = (139, 233, 253)
    green = (80, 250, 123)
    orange = (255, 184, 108)
    pink = (255, 121, 198)
    purple = (189, 147, 249)
    red = (255, 85, 85)
    yellow = (241, 250, 140)
    base = (40, 42, 54)
    line = (68, 71, 90)
    return Theme(
        name="dracula",
        background_left=(33, 34, 44),
        background_right=base,
        editor_line_number=comment,
        editor_line_number_cursor=fg,
        editor_separator=comment,
        editor_cursor_char_bg=purple,
        editor_cursor_char_fg=base,
        editor_cursor_line_bg=line,
        file_tree_added=green,
        file_tree_deleted=red,
        file_tree_modified=orange,
        file_tree_renamed=purple,
        file_tree_directory=cyan,
        file_tree_current_file_bg=line,
        file_tree_current_file_fg=fg,
        file_tree_default=fg,
        file_tree_stats_added=green,
        file_tree_stats_deleted=red,
        terminal_command=fg,
        terminal_output=comment,
        terminal_cursor_bg=purple,
        terminal_cursor_fg=base,
        status_hash=yellow,
        status_author=green,
        status_date=cyan,
        status_message=fg,
        status_no_commit=comment,
        separator=comment,
        syntax=_syntax(keyword=pink, type=cyan, function=green, variable=fg,
                       string=yellow, number=purple, comment=comment, operator=pink,
                       punctuation=fg, constant=purple, parameter=orange,
                       property=cyan, label=pink),
    )


def _nord():
    fg = (216, 222, 233)
    muted = (97, 110, 136)
    frost0 = (143, 188, 187)
    frost1 = (136, 192, 208)
    frost2 = (129, 161, 193)
    red = (191, 97, 106)
    orange = (208, 135, 112)
    yellow = (235, 203, 139)
    green = (163, 190, 140)
    purple = (180, 142, 173)
    base = (46, 52, 64)
    line = (59, 66, 82)
    return Theme(
        name="nord",
        background_left=(40, 45, 56),
        background_right=base,
        editor_line_number=muted,
        editor_line_number_cursor=frost1,
        editor_separator=muted,
        editor_cursor_char_bg=frost1,
        editor_cursor_char_fg=base,
        editor_cursor_line_bg=line,
        file_tree_added=green,
        file_tree_deleted=red,
        file_tree_modified=orange,
        file_tree_renamed=frost2,
        file_tree_directory=frost2,
        file_tree_current_file_bg=line,
        file_tree_current_file_fg=fg,
        file_tree_default=fg,
        file_tree_stats_added=green,
        file_tree_stats_deleted=red,
        terminal_command=fg,
        terminal_output=muted,
        terminal_cursor_bg=frost1,
        terminal_cursor_fg=base,
        status_hash=yellow,
        status_author=green,
        status_date=frost2,
        status_message=fg,
        status_no_commit=muted,
        separator=muted,
        syntax=_syntax(keyword=frost2, type=frost0, function=frost1, variable=fg,
                       string=green, number=purple, comment=muted, operator=frost2,
                       punctuation=(236, 239, 244), constant=purple, parameter=yellow,
                       property=frost0, label=orange),
    )


THEMES = dict( (theme.name, theme) for theme in (_tokyoNight(), _dracula(), _nord()) )


##
## Rich style from theme colors.
##
## @param tuple fg Foreground (r, g, b) or None
## @param tuple bg Background (r, g, b) or None
## @param bool bold Bold text
## @return rich.style.Style
##
def richStyle( fg=None, bg=None, bold=False ):
    return Style(
        color=Color.from_rgb(*fg) if fg is not None else None,
        bgcolor=Color.from_rgb(*bg) if bg is not None else None,
        bold=bold or None,
    )
