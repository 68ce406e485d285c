#! /usr/bin/env python3

"""
Playback buffer: the text, cursor and scroll state the editor pane renders.

Typing model: the first character of a new line opens a row of its own at
the cursor, pushing the old line under the cursor down, and "\\n" moves the
cursor to the next row. The row being typed therefore only ever holds new
text, and at every line boundary the lines above the cursor are the new
text's prefix and the lines from the cursor down are the untouched old
suffix:

    lines[:cursorLine]  == newLines[:cursorLine]
    lines[cursorLine:]  == oldLines[cursorLine - lineOffset:]

lineOffset counts new rows opened minus old lines consumed (skipped or
deleted). While a row is being typed it already counts, so the old lines
below it keep their mapping.

The highlight blending below relies on this duality: lines up to the cursor
take their colors from the new snapshot, lines below from the old snapshot
shifted by lineOffset.
"""

import bisect
import logging
from dataclasses import dataclass

from .data_structures import StepType
from .utils import splitLines, offsetAt, charByteRanges

logger = logging.getLogger(__name__)

__all__ = ["Cursor", "PlaybackBuffer"]


@dataclass
class Cursor:
    line: int = 0
    col: int = 0


##
## Playback buffer class.
##
## @class PlaybackBuffer
##
class PlaybackBuffer:

    def __init__(self):

        # @var list lines Current text lines, without terminators
        self.lines = []

        # @var Cursor cursor Cursor position (line index, character column)
        self.cursor = Cursor(0, 0)

        # @var int scrollOffset First visible line
        self.scrollOffset = 0

        # @var int lineOffset New rows opened minus old lines consumed
        self.lineOffset = 0

        # @var DiffSnapshot snapshot Snapshot of the file being played
        self.snapshot = None

        self._oldStarts = ()
        self._newStarts = ()

    @property
    def cursorLine(self):
        return self.cursor.line

    @property
    def cursorCol(self):
        return self.cursor.col

    @property
    def oldHighlights(self):
        return self.snapshot.oldHighlights if self.snapshot is not None else ()

    @property
    def newHighlights(self):
        return self.snapshot.newHighlights if self.snapshot is not None else ()

    @property
    def oldLineOffsets(self):
        return self.snapshot.oldLineOffsets if self.snapshot is not None else (0,)

    @property
    def newLineOffsets(self):
        return self.snapshot.newLineOffsets if self.snapshot is not None else (0,)


    ##
    ## Load the old text of a snapshot, cursor at the top.
    ##
    def reset( self, snapshot ):

        self.snapshot = snapshot
        self.lines = splitLines(snapshot.oldText)
        self.cursor.line = 0
        self.cursor.col = 0
        self.scrollOffset = 0
        self.lineOffset = 0
        self._oldStarts = tuple(span.start for span in snapshot.oldHighlights)
        self._newStarts = tuple(span.start for span in snapshot.newHighlights)

    ##
    ## Show the new text of a snapshot at once, used when a file cannot be
    ## animated. The cursor rests on the last line so that every line is
    ## colored from the new snapshot.
    ##
    def reveal( self, snapshot ):

        self.reset(snapshot)
        self.lines = splitLines(snapshot.newText)
        self.cursor.line = max(len(self.lines) - 1, 0)
        self.lineOffset = snapshot.newLineCount - snapshot.oldLineCount

    def clear(self):
        self.snapshot = None
        self.lines = []
        self.cursor.line = 0
        self.cursor.col = 0
        self.scrollOffset = 0
        self.lineOffset = 0
        self._oldStarts = ()
        self._newStarts = ()


    ##
    ## Apply one edit step.
    ##
    ## @param EditStep step Step of type SKIP_CONTEXT_LINE, DELETE_LINE or TYPE_CHAR
    ##
    def apply( self, step ):

        if step.type is StepType.SKIP_CONTEXT_LINE:
            self.skipContextLine()
        elif step.type is StepType.DELETE_LINE:
            self.deleteLine()
        elif step.type is StepType.TYPE_CHAR:
            self.typeChar(step.char)
        else:
            raise ValueError("not an edit step: {}".format(step.type))

    def skipContextLine(self):
        self.cursor.line += 1
        self.cursor.col = 0

    def deleteLine(self):
        if self.cursor.line < len(self.lines):
            del self.lines[self.cursor.line]
        self.cursor.col = 0
        self.lineOffset -= 1

    def typeChar( self, char ):

        line = self.cursor.line

        # A new line starts on a row of its own above the old line
        if self.cursor.col == 0:
            self.lines.insert(line, "")
            self.lineOffset += 1

        if char == "\n":
            self.cursor.line += 1
            self.cursor.col = 0
        else:
            self.lines[line] += char
            self.cursor.col += 1


    ##
    ## Keep the cursor line inside the viewport.
    ##
    ## @param int height Number of visible lines
    ##
    def updateScroll( self, height ):

        if height <= 0:
            return
        if self.cursor.line - self.scrollOffset >= height:
            self.scrollOffset = self.cursor.line - height + 1
        if self.cursor.line < self.scrollOffset:
            self.scrollOffset = self.cursor.line


    ##
    ## Select the highlight source of a displayed line.
    ##
    ## Lines up to and including the cursor line are already typed (or being
    ## typed) and use the new snapshot at their own index. Lines below the
    ## cursor are untouched old lines and use the old snapshot at
    ## max(0, line - lineOffset).
    ##
    ## @param int lineNum Buffer line index
    ## @return tuple (spans, span starts, byte offset of the line start)
    ##
    def highlightSource( self, lineNum ):

        if lineNum <= self.cursor.line:
            return self.newHighlights, self._newStarts, offsetAt(self.newLineOffsets, lineNum)

        target = max(0, lineNum - self.lineOffset)
        return self.oldHighlights, self._oldStarts, offsetAt(self.oldLineOffsets, target)


    ##
    ## Token kinds of every character of a displayed line. A character gets
    ## the kind of the first span whose byte range contains the whole
    ## character, None when no span does.
    ##
    ## @param int lineNum Buffer line index
    ## @return list (character, TokenKind or None) pairs
    ##
    def lineTokens( self, lineNum ):

        if lineNum >= len(self.lines):
            return []
        line = self.lines[lineNum]
        spans, starts, base = self.highlightSource(lineNum)
        lineEnd = base + len(line.encode("utf-8"))

        # Only spans starting before the end of the line can touch it
        limit = bisect.bisect_left(starts, lineEnd)
        candidates = [ span for span in spans[:limit] if span.end > base ]

        tokens = []
        for char, start, end in charByteRanges(line, base):
            kind = None
            for span in candidates:
                if span.start <= start and end <= span.end:
                    kind = span.kind
                    break
            tokens.append( (char, kind) )
        return tokens
