#! /usr/bin/env python3

from rich.cells import cell_len
from rich.text import Text

from .data_structures import ActivePane
from .theme import richStyle
from .utils import distanceOpacity, blendColor

__all__ = ["EditorPane"]

class EditorPane:

    # Characters used for padding
    padding = "  "
    separator = "  "
    tab = "    "

    # Minimum width of the line number column
    lineNumberWidth = 3

    def __init__(self, theme):
        self.theme = theme

    ##
    ## Render the visible part of the playback buffer.
    ##
    ## @param AnimationEngine engine Engine to project, not modified
    ## @param int width Pane width in cells
    ## @param int height Pane height in lines
    ## @return rich.text.Text Styled lines
    ##
    def render( self, engine, width, height ):

        buffer = engine.buffer
        # the cursor may rest on a virtual line after the last one
        count = max(len(buffer.lines), buffer.cursorLine + 1)
        numberWidth = max(self.lineNumberWidth, len(str(count)))

        text = Text(no_wrap=True, overflow="crop", end="")
        first = buffer.scrollOffset
        for lineNum in range(first, min(count, first + height)):
            if lineNum > first:
                text.append("\n")
            for segment, style in self.renderLine(engine, lineNum, numberWidth, width):
                text.append(segment, style=style)
        return text


    ##
    ## Styled segments of one line.
    ##
    def renderLine( self, engine, lineNum, numberWidth, width ):

        theme = self.theme
        buffer = engine.buffer
        cursorLine = buffer.cursorLine
        isCursorLine = lineNum == cursorLine
        opacity = distanceOpacity(lineNum - cursorLine)
        showCursor = isCursorLine and engine.cursorVisible is True and engine.activePane is ActivePane.EDITOR

        lineBg = theme.editor_cursor_line_bg if isCursorLine else theme.background_right
        fillBg = theme.editor_cursor_line_bg if isCursorLine else None
        cursorStyle = richStyle(theme.editor_cursor_char_fg, theme.editor_cursor_char_bg, bold=True)

        segments = [ (self.padding, richStyle(bg=fillBg)) ]

        number = "{:>{}} ".format(lineNum + 1, numberWidth)
        if isCursorLine:
            segments.append( (number, richStyle(theme.editor_line_number_cursor, fillBg, bold=True)) )
        else:
            segments.append( (number, richStyle(blendColor(theme.editor_line_number, theme.background_right, opacity))) )

        separatorColor = theme.editor_separator if isCursorLine else \
                blendColor(theme.editor_separator, theme.background_right, opacity)
        segments.append( (self.separator, richStyle(separatorColor, fillBg)) )

        tokens = buffer.lineTokens(lineNum)
        for col, (char, kind) in enumerate(tokens):
            display = self.tab if char == "\t" else char
            if showCursor and col == buffer.cursorCol:
                segments.append( (display, cursorStyle) )
            else:
                color = blendColor(theme.tokenColor(kind), lineBg, opacity)
                segments.append( (display, richStyle(color, fillBg)) )

        if showCursor and buffer.cursorCol >= len(tokens):
            segments.append( (" ", cursorStyle) )

        segments.append( (self.padding, richStyle(bg=fillBg)) )

        # Fill the cursor line to the right edge
        if isCursorLine:
            used = sum(cell_len(segment) for segment, _ in segments)
            if used < width:
                segments.append( (" " * (width - used), richStyle(bg=fillBg)) )

        return self.merge(segments)


    ##
    ## Join neighbouring segments with equal styles.
    ##
    def merge( self, segments ):
        merged = []
        for segment, style in segments:
            if merged and merged[-1][1] == style:
                merged[-1] = (merged[-1][0] + segment, style)
            else:
                merged.append( (segment, style) )
        return merged
