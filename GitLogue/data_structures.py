#! /usr/bin/env python3

"""
Main data structures shared by the edit script builder, the playback buffer
and the animation engine.

See animation.py for documentation of how they fit together.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

__all__ = ["LineTag", "FileStatus", "TokenKind", "StepType", "ActivePane",
           "EngineState", "DiffLine", "Hunk", "FileChange", "CommitMetadata",
           "HighlightSpan", "DiffSnapshot", "EditStep", "EditScriptError",
           "ConfigError", "RepositoryError"]


class LineTag(Enum):
    CONTEXT = " "
    ADDED = "+"
    REMOVED = "-"


class FileStatus(Enum):
    ADDED = "A"
    DELETED = "D"
    MODIFIED = "M"
    RENAMED = "R"


##
## Closed set of token categories produced by the highlighter.
##
## @class TokenKind
##
class TokenKind(Enum):
    KEYWORD = "keyword"
    TYPE = "type"
    FUNCTION = "function"
    VARIABLE = "variable"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    OPERATOR = "operator"
    PUNCTUATION = "punctuation"
    CONSTANT = "constant"
    PARAMETER = "parameter"
    PROPERTY = "property"
    LABEL = "label"


##
## Step kinds of a commit timeline. The first three are produced by the
## edit script builder, the rest are added by the animation engine.
##
## @class StepType
##
class StepType(Enum):
    SKIP_CONTEXT_LINE = "skip"
    DELETE_LINE = "delete"
    TYPE_CHAR = "type"
    OPEN_FILE = "open"
    REVEAL_FILE = "reveal"
    SWITCH_PANE = "pane"
    TERMINAL_COMMAND = "command"
    TERMINAL_CHAR = "char"
    TERMINAL_OUTPUT = "output"
    PAUSE = "pause"


class ActivePane(Enum):
    EDITOR = "editor"
    TERMINAL = "terminal"


class EngineState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    COMMIT_DONE = "done"
    FINISHED = "finished"


##
## Diff line element, content is stored without its line terminator.
##
## @class DiffLine
##
@dataclass(frozen=True)
class DiffLine:
    content: str
    tag: LineTag
    newline: bool = True

    @property
    def text(self):
        return self.content + "\n" if self.newline is True else self.content

##
## Hunk element, oldStart and newStart are 1-based line numbers as in
## unified diff headers.
##
## @class Hunk
##
@dataclass
class Hunk:
    lines: list
    oldStart: int = None
    newStart: int = None

    def additions(self):
        return sum(1 for line in self.lines if line.tag is LineTag.ADDED)

    def deletions(self):
        return sum(1 for line in self.lines if line.tag is LineTag.REMOVED)

##
## File change element.
##
## @class FileChange
##
@dataclass
class FileChange:
    path: str
    status: FileStatus
    hunks: list
    oldText: str = ""
    newText: str = ""
    oldPath: str = None
    binary: bool = False

    @property
    def additions(self):
        return sum(hunk.additions() for hunk in self.hunks)

    @property
    def deletions(self):
        return sum(hunk.deletions() for hunk in self.hunks)

##
## Commit metadata element.
##
## @class CommitMetadata
##
@dataclass
class CommitMetadata:
    hash: str
    author: str
    date: datetime
    message: str
    # None until loadChanges() when a loader is set
    changes: list = None
    loader: object = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.changes is None and self.loader is None:
            self.changes = []

    ##
    ## File changes of the commit, computed by the loader on first use.
    ##
    def loadChanges(self):
        if self.changes is None:
            self.changes = list( self.loader() )
        return self.changes

    ##
    ## Drop loaded changes again; they are recomputed on the next load.
    ##
    def release(self):
        if self.loader is not None:
            self.changes = None

    @property
    def shortHash(self):
        return self.hash[:7]

    @property
    def subject(self):
        for line in self.message.splitlines():
            if line.strip():
                return line.strip()
        return ""

##
## Highlight span element, byte offsets are half-open and point into the
## UTF-8 encoding of the text the span was computed from.
##
## @class HighlightSpan
##
@dataclass(frozen=True)
class HighlightSpan:
    start: int
    end: int
    kind: TokenKind

##
## Frozen old/new text pair of one file change.
##
## @class DiffSnapshot
##
@dataclass(frozen=True)
class DiffSnapshot:
    path: str
    oldText: str
    newText: str
    oldLineOffsets: tuple
    newLineOffsets: tuple
    oldHighlights: tuple
    newHighlights: tuple
    oldLineCount: int
    newLineCount: int

##
## Timeline step element.
##
## @class EditStep
##
@dataclass(frozen=True)
class EditStep:
    type: StepType
    char: str = None
    text: str = None
    fileIndex: int = None
    pane: ActivePane = None


class EditScriptError(Exception):
    """Hunk data does not agree with the snapshot texts."""


class ConfigError(Exception):
    """Configuration file cannot be read, parsed or written."""


class RepositoryError(Exception):
    pass
