"""
Shared fixtures for the GitLogue test suite.

- makeChange: builds a FileChange with unified-diff style hunks from an old
  and a new text, the way the repository layer delivers them
- playScript: replays an edit script on a fresh PlaybackBuffer
- configFile: path of a throwaway configuration file
- gitRepo: throwaway git repository with a commit helper
"""

import difflib
import os
import sys
from datetime import datetime, timezone

import pytest

# Make the package and replay.py importable without installing
_repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from GitLogue import *


def textLines(text):
    lines = splitLines(text)
    terminated = text.endswith("\n")
    return [ (line, i < len(lines) - 1 or terminated) for i, line in enumerate(lines) ]


def diffLines(pairs, tag):
    return [ DiffLine(content=content, tag=tag, newline=newline) for content, newline in pairs ]


def buildHunks(oldText, newText, context=3):
    old = textLines(oldText)
    new = textLines(newText)
    matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)

    hunks = []
    for group in matcher.get_grouped_opcodes(context):
        lines = []
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                lines.extend( diffLines(old[i1:i2], LineTag.CONTEXT) )
                continue
            if tag in ("replace", "delete"):
                lines.extend( diffLines(old[i1:i2], LineTag.REMOVED) )
            if tag in ("replace", "insert"):
                lines.extend( diffLines(new[j1:j2], LineTag.ADDED) )

        oldFirst, oldLast = group[0][1], group[-1][2]
        newFirst, newLast = group[0][3], group[-1][4]
        hunks.append( Hunk(
            lines=lines,
            oldStart=oldFirst + 1 if oldLast > oldFirst else oldFirst,
            newStart=newFirst + 1 if newLast > newFirst else newFirst,
        ) )
    return hunks


@pytest.fixture
def makeChange():
    def make(oldText, newText, path="main.py", status=None, context=3):
        if status is None:
            if oldText == "":
                status = FileStatus.ADDED
            elif newText == "":
                status = FileStatus.DELETED
            else:
                status = FileStatus.MODIFIED
        return FileChange(path=path, status=status, hunks=buildHunks(oldText, newText, context),
                          oldText=oldText, newText=newText)
    return make


@pytest.fixture
def makeCommit():
    def make(changes, message="Add feature", hash="abcdef1234567890abcdef1234567890abcdef12"):
        return CommitMetadata(hash=hash, author="Test Author",
                              date=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
                              message=message, changes=list(changes))
    return make


@pytest.fixture
def playScript():
    def play(change, onStep=None):
        snapshot = buildSnapshot(change)
        steps = EditScriptBuilder().build(change, snapshot)
        buffer = PlaybackBuffer()
        buffer.reset(snapshot)
        for step in steps:
            buffer.apply(step)
            if onStep is not None:
                onStep(buffer, step)
        return buffer, steps
    return play


@pytest.fixture
def configFile(tmp_path):
    return tmp_path / "gitlogue" / "config.toml"


class RepoBuilder:

    def __init__(self, path):
        import pygit2
        self.pygit2 = pygit2
        self.path = path
        self.repo = pygit2.init_repository(str(path))
        self.time = 1700000000

    def commit(self, files, message):
        pygit2 = self.pygit2
        for name, contents in files.items():
            target = self.path / name
            if contents is None:
                target.unlink()
                self.repo.index.remove(name)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(contents, bytes):
                target.write_bytes(contents)
            else:
                target.write_text(contents, encoding="utf-8")
            self.repo.index.add(name)
        self.repo.index.write()
        tree = self.repo.index.write_tree()

        self.time += 60
        signature = pygit2.Signature("Test Author", "author@example.com", self.time, 60)
        parents = [] if self.repo.head_is_unborn else [self.repo.head.target]
        return self.repo.create_commit("HEAD", signature, signature, message, tree, parents)


@pytest.fixture
def gitRepo(tmp_path):
    pytest.importorskip("pygit2")
    return RepoBuilder(tmp_path / "repo")
