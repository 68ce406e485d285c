#! /usr/bin/env python3

from rich.text import Text

from .data_structures import ActivePane
from .theme import richStyle

__all__ = ["TerminalPane"]

class TerminalPane:

    # Prefix of command lines in the transcript
    prompt = "~ "

    def __init__(self, theme):
        self.theme = theme

    ##
    ## Render the tail of the terminal transcript.
    ##
    ## @param AnimationEngine engine Engine to project, not modified
    ## @param int height Pane height in lines
    ## @return rich.text.Text Styled lines
    ##
    def render( self, engine, height ):

        theme = self.theme
        lines = engine.terminalLines
        start = max(len(lines) - height, 0)
        showCursor = engine.cursorVisible is True and engine.activePane is ActivePane.TERMINAL

        text = Text(no_wrap=True, overflow="crop", end="")
        for index in range(start, len(lines)):
            line = lines[index]
            if index > start:
                text.append("\n")
            if line.startswith(self.prompt):
                text.append(line, style=richStyle(theme.terminal_command))
                if showCursor and index == len(lines) - 1:
                    text.append(" ", style=richStyle(theme.terminal_cursor_fg, theme.terminal_cursor_bg, bold=True))
            else:
                text.append(line, style=richStyle(theme.terminal_output))
        return text
