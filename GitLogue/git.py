#! /usr/bin/env python3

"""
Repository layer: reads commits and their line diffs with pygit2.
"""

import functools
import logging
from datetime import datetime, timedelta, timezone

import pygit2
from pygit2.enums import DiffFind, SortMode

from .data_structures import *

logger = logging.getLogger(__name__)

__all__ = ["GitRepository"]

STATUS = {
    "A": FileStatus.ADDED,
    "D": FileStatus.DELETED,
    "M": FileStatus.MODIFIED,
    "R": FileStatus.RENAMED,
}

TAGS = {
    " ": LineTag.CONTEXT,
    "+": LineTag.ADDED,
    "-": LineTag.REMOVED,
}


##
## Repository class.
##
## @class GitRepository
##
class GitRepository:

    ##
    ## Open the repository containing path.
    ##
    ## @param string path Any path inside the working tree
    ## @param int contextLines Unchanged lines around every hunk
    ## @raise RepositoryError No repository found
    ##
    def __init__( self, path=".", contextLines=3 ):

        gitdir = pygit2.discover_repository(str(path))
        if not gitdir:
            raise RepositoryError("not a git repository: {}".format(path))
        try:
            self.repo = pygit2.Repository(gitdir)
        except pygit2.GitError as e:
            raise RepositoryError("cannot open repository {}: {}".format(gitdir, e)) from e
        self.contextLines = contextLines


    ##
    ## All commits reachable from HEAD, oldest first. Their file changes are
    ## only diffed when loadChanges() is called on them.
    ##
    ## @return list CommitMetadata elements
    ##
    def commits(self):

        if self.repo.head_is_unborn:
            raise RepositoryError("repository has no commits: {}".format(self.repo.path))

        walker = self.repo.walk( self.repo.head.target, SortMode.TOPOLOGICAL | SortMode.TIME | SortMode.REVERSE )
        commits = [ self.metadata(commit) for commit in walker ]
        logger.debug( 'Loaded {} commits from {}'.format(len(commits), self.repo.path) )
        return commits


    ##
    ## Resolve one revision.
    ##
    ## @param string rev Commit hash or any revision understood by git
    ## @return CommitMetadata
    ##
    def commit( self, rev ):

        try:
            obj = self.repo.revparse_single(rev)
            commit = obj.peel(pygit2.Commit)
        except (KeyError, ValueError, pygit2.GitError) as e:
            raise RepositoryError("unknown commit: {}".format(rev)) from e
        return self.metadata(commit)


    def metadata( self, commit ):

        author = commit.author
        date = datetime.fromtimestamp( author.time, timezone(timedelta(minutes=author.offset)) )
        return CommitMetadata(
            hash=str(commit.id),
            author=author.name,
            date=date,
            message=commit.message,
            loader=functools.partial(self.changes, commit),
        )


    ##
    ## File changes of a commit against its first parent.
    ##
    def changes( self, commit ):

        if commit.parents:
            diff = self.repo.diff( commit.parents[0], commit, context_lines=self.contextLines )
        else:
            diff = commit.tree.diff_to_tree( swap=True, context_lines=self.contextLines )
        diff.find_similar(flags=DiffFind.FIND_RENAMES)

        changes = []
        for patch in diff:
            change = self.fileChange(patch)
            if change is not None:
                changes.append(change)
        return changes


    def fileChange( self, patch ):

        delta = patch.delta
        status = STATUS.get( delta.status_char() )
        path = delta.new_file.path if status is not FileStatus.DELETED else delta.old_file.path
        if status is None:
            logger.debug( 'Skipping {} with status {}'.format(path, delta.status_char()) )
            return None

        if delta.is_binary:
            logger.debug( 'Skipping binary file {}'.format(path) )
            return None

        try:
            oldText = "" if status is FileStatus.ADDED else self.blobText(delta.old_file.id)
            newText = "" if status is FileStatus.DELETED else self.blobText(delta.new_file.id)
        except UnicodeDecodeError:
            logger.debug( 'Skipping undecodable file {}'.format(path) )
            return None
        if oldText is None or newText is None:
            logger.debug( 'Skipping non-blob entry {}'.format(path) )
            return None

        hunks = []
        for hunk in patch.hunks:
            lines = []
            for line in hunk.lines:
                tag = TAGS.get(line.origin)
                # "no newline at end of file" markers carry no text
                if tag is None:
                    continue
                content = line.content
                newline = content.endswith("\n")
                if newline:
                    content = content[:-1]
                lines.append( DiffLine(content=content, tag=tag, newline=newline) )
            hunks.append( Hunk(lines=lines, oldStart=hunk.old_start, newStart=hunk.new_start) )

        return FileChange(
            path=path,
            status=status,
            hunks=hunks,
            oldText=oldText,
            newText=newText,
            oldPath=delta.old_file.path if status is FileStatus.RENAMED else None,
        )


    def blobText( self, oid ):
        obj = self.repo.get(oid)
        if not isinstance(obj, pygit2.Blob):
            return None
        return obj.data.decode("utf-8")
