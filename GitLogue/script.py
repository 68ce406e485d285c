#! /usr/bin/env python3

"""
Diff snapshots and the edit script builder.

A snapshot freezes the old and new text of one file change together with
their line offset tables and highlight spans. The edit script builder walks
the hunks of the change against the snapshot and produces the keystroke
sequence that morphs the old text into the new one:

  SKIP_CONTEXT_LINE  unchanged line, the cursor passes over it
  DELETE_LINE        removed line, vanishes at once
  TYPE_CHAR          one character of an added line, "\\n" ends the line

Inside every run of changed lines all deletions come before the typed
insertions, so the old line disappears and the new one is typed in its
place.
"""

import logging

from .data_structures import *
from .utils import splitLines, lineStartOffsets

logger = logging.getLogger(__name__)

__all__ = ["buildSnapshot", "EditScriptBuilder"]


##
## Build the frozen snapshot of a file change.
##
## @param FileChange change File change with full old and new text
## @param Highlighter highlighter Highlighter, may be None to disable colors
## @return DiffSnapshot
##
def buildSnapshot( change, highlighter=None ):

    oldHighlights = ()
    newHighlights = ()
    if highlighter is not None and highlighter.selectLanguage(change.path) is True:
        oldHighlights = tuple(highlighter.highlight(change.oldText))
        newHighlights = tuple(highlighter.highlight(change.newText))

    return DiffSnapshot(
        path=change.path,
        oldText=change.oldText,
        newText=change.newText,
        oldLineOffsets=lineStartOffsets(change.oldText),
        newLineOffsets=lineStartOffsets(change.newText),
        oldHighlights=oldHighlights,
        newHighlights=newHighlights,
        oldLineCount=len(splitLines(change.oldText)),
        newLineCount=len(splitLines(change.newText)),
    )


##
## Lines of a text as (content, terminated) pairs.
##
def _textLines(text):
    lines = splitLines(text)
    terminated = text.endswith("\n")
    return [ (line, i < len(lines) - 1 or terminated) for i, line in enumerate(lines) ]


##
## Edit script builder class.
##
## @class EditScriptBuilder
##
class EditScriptBuilder:

    ##
    ## Convert the hunks of a file change into an ordered list of steps.
    ##
    ## @param FileChange change File change
    ## @param DiffSnapshot snapshot Snapshot built from the same change
    ## @return list EditStep elements
    ## @raise EditScriptError Hunks do not reproduce the snapshot texts
    ##
    def build( self, change, snapshot ):

        self.path = change.path
        self.oldLines = _textLines(snapshot.oldText)
        self.newLines = _textLines(snapshot.newText)
        self.oldIndex = 0
        self.newIndex = 0
        steps = []

        for number, hunk in enumerate(change.hunks):
            steps.extend( self.skipGap(hunk, number) )

            run = []
            for line in hunk.lines:
                if line.tag is LineTag.CONTEXT:
                    steps.extend( self.changeRun(run) )
                    run = []
                    self.expectOld(line)
                    self.expectNew(line)
                    steps.append( EditStep(StepType.SKIP_CONTEXT_LINE) )
                else:
                    run.append(line)
            steps.extend( self.changeRun(run) )

        # Everything after the last hunk has to be unchanged
        if self.oldLines[self.oldIndex:] != self.newLines[self.newIndex:]:
            raise EditScriptError(
                '{}: text after the last hunk differs between old and new version'.format(self.path) )

        logger.debug( '{}: {} steps'.format(self.path, len(steps)) )
        return steps


    ##
    ## Emit skips for the unchanged lines between the previous hunk and the
    ## start of this one.
    ##
    def skipGap( self, hunk, number ):

        if hunk.oldStart is None or hunk.newStart is None:
            return []

        oldCount = sum(1 for line in hunk.lines if line.tag is not LineTag.ADDED)
        newCount = sum(1 for line in hunk.lines if line.tag is not LineTag.REMOVED)

        # Unified diff headers name the line before the hunk when a side is empty
        oldTarget = hunk.oldStart - 1 if oldCount > 0 else hunk.oldStart
        newTarget = hunk.newStart - 1 if newCount > 0 else hunk.newStart

        gap = oldTarget - self.oldIndex
        if gap < 0 or gap != newTarget - self.newIndex:
            raise EditScriptError(
                '{}: hunk {} starts at old line {} / new line {}, expected a gap of equal length after old line {} / new line {}'.format(
                    self.path, number, hunk.oldStart, hunk.newStart, self.oldIndex, self.newIndex) )

        steps = []
        for _ in range(gap):
            if self.oldIndex >= len(self.oldLines) or self.newIndex >= len(self.newLines) or \
               self.oldLines[self.oldIndex] != self.newLines[self.newIndex]:
                raise EditScriptError(
                    '{}: unchanged line {} before hunk {} differs between versions'.format(self.path, self.oldIndex + 1, number) )
            self.oldIndex += 1
            self.newIndex += 1
            steps.append( EditStep(StepType.SKIP_CONTEXT_LINE) )
        return steps


    ##
    ## Emit the steps of a contiguous run of removed and added lines:
    ## deletions first, then the typed insertions.
    ##
    def changeRun( self, run ):

        steps = []
        for line in run:
            if line.tag is LineTag.REMOVED:
                self.expectOld(line)
                steps.append( EditStep(StepType.DELETE_LINE) )

        for line in run:
            if line.tag is LineTag.ADDED:
                self.expectNew(line)
                for char in line.text:
                    steps.append( EditStep(StepType.TYPE_CHAR, char=char) )

        return steps


    def expectOld( self, line ):
        if self.oldIndex >= len(self.oldLines) or self.oldLines[self.oldIndex] != (line.content, line.newline):
            raise EditScriptError(
                '{}: {!r} does not match old line {}'.format(self.path, line.content, self.oldIndex + 1) )
        self.oldIndex += 1

    def expectNew( self, line ):
        if self.newIndex >= len(self.newLines) or self.newLines[self.newIndex] != (line.content, line.newline):
            raise EditScriptError(
                '{}: {!r} does not match new line {}'.format(self.path, line.content, self.newIndex + 1) )
        self.newIndex += 1
