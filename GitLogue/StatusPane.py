#! /usr/bin/env python3

from rich.text import Text

from .theme import richStyle

__all__ = ["StatusPane"]

class StatusPane:

    dateFormat = "%Y-%m-%d %H:%M:%S"

    def __init__(self, theme):
        self.theme = theme

    ##
    ## Render hash, author, date and message of the current commit.
    ##
    def render( self, engine ):

        theme = self.theme
        commit = engine.currentCommit
        text = Text(end="")
        if commit is None:
            text.append("No commit loaded", style=richStyle(theme.status_no_commit))
            return text

        text.append("hash: ")
        text.append(commit.shortHash, style=richStyle(theme.status_hash))
        text.append("\nauthor: ")
        text.append(commit.author, style=richStyle(theme.status_author))
        text.append("\ndate: ")
        text.append(commit.date.strftime(self.dateFormat), style=richStyle(theme.status_date))

        for line in commit.message.splitlines():
            if line.strip():
                text.append("\n")
                text.append(line, style=richStyle(theme.status_message))
        return text
