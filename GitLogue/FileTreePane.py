#! /usr/bin/env python3

from rich.cells import cell_len
from rich.text import Text

from .data_structures import FileStatus
from .theme import richStyle

__all__ = ["FileTreePane"]

class FileTreePane:

    # Status markers
    marks = {
        FileStatus.ADDED: "+",
        FileStatus.DELETED: "-",
        FileStatus.MODIFIED: "~",
        FileStatus.RENAMED: ">",
    }

    indent = "  "

    def __init__(self, theme):
        self.theme = theme

    def statusColor( self, status ):
        theme = self.theme
        return {
            FileStatus.ADDED: theme.file_tree_added,
            FileStatus.DELETED: theme.file_tree_deleted,
            FileStatus.MODIFIED: theme.file_tree_modified,
            FileStatus.RENAMED: theme.file_tree_renamed,
        }.get(status, theme.file_tree_default)

    ##
    ## Group the changed files of a commit by directory.
    ##
    ## @param CommitMetadata commit Commit
    ## @return list (directory, [(file index, name, FileChange)]) sorted by directory
    ##
    def tree( self, commit ):
        groups = {}
        for index, change in enumerate(commit.loadChanges()):
            directory, _, name = change.path.rpartition("/")
            groups.setdefault(directory, []).append( (index, name, change) )
        return sorted(groups.items())


    ##
    ## Render the file tree of the current commit.
    ##
    ## @param AnimationEngine engine Engine to project, not modified
    ## @param int width Pane width in cells
    ## @return rich.text.Text Styled lines
    ##
    def render( self, engine, width ):

        theme = self.theme
        commit = engine.currentCommit
        text = Text(no_wrap=True, overflow="ellipsis", end="")
        if commit is None:
            text.append("No commit loaded", style=richStyle(theme.status_no_commit))
            return text

        first = True
        for directory, files in self.tree(commit):
            if directory:
                if not first:
                    text.append("\n")
                first = False
                text.append(directory + "/", style=richStyle(theme.file_tree_directory, bold=True))

            for index, name, change in files:
                if not first:
                    text.append("\n")
                first = False

                current = index == engine.currentFileIndex
                bg = theme.file_tree_current_file_bg if current else None
                color = self.statusColor(change.status)
                segments = [
                    (self.indent if directory else "", richStyle(bg=bg)),
                    (self.marks.get(change.status, " ") + " ", richStyle(color, bg, bold=True)),
                    (name, richStyle(theme.file_tree_current_file_fg if current else theme.file_tree_default, bg, bold=current)),
                    (" +{}".format(change.additions), richStyle(theme.file_tree_stats_added, bg)),
                    (" -{}".format(change.deletions), richStyle(theme.file_tree_stats_deleted, bg)),
                ]
                if current:
                    used = sum(cell_len(segment) for segment, _ in segments)
                    if used < width:
                        segments.append( (" " * (width - used), richStyle(bg=bg)) )
                for segment, style in segments:
                    text.append(segment, style=style)

        return text
