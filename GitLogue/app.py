#! /usr/bin/env python3

"""
Terminal dashboard: four panes around the animation engine.

The textual interval timer is the tick source. Every tick advances the
engine by one unit and re-renders the panes; key bindings deliver skip and
pane switch events between ticks.
"""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.color import Color
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from .data_structures import EngineState
from .EditorPane import EditorPane
from .FileTreePane import FileTreePane
from .StatusPane import StatusPane
from .TerminalPane import TerminalPane

logger = logging.getLogger(__name__)

__all__ = ["GitLogueApp"]


class GitLogueApp(App):

    TITLE = "gitlogue"

    CSS = """
Screen {
    overflow: hidden;
}
#left {
    width: 30%;
}
#right {
    width: 70%;
}
#tree {
    height: 1fr;
    padding: 1 2;
}
#status {
    height: auto;
    max-height: 40%;
    padding: 1 2;
}
#editor {
    height: 3fr;
    padding: 1 0;
}
#terminal {
    height: 1fr;
    padding: 1 2;
}
"""

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("escape", "quit", "Quit", show=False),
        Binding("space", "skip", "Skip commit"),
        Binding("tab", "toggle_pane", "Switch pane", priority=True),
    ]

    ##
    ## @param AnimationEngine engine Engine to drive
    ## @param Theme theme Color theme
    ## @param GitLogueConfig config Settings (speed, background)
    ##
    def __init__( self, engine, theme, config, **kwargs ):
        super().__init__(**kwargs)
        self.engine = engine
        self.theme_colors = theme
        self.settings = config
        self.editorPane = EditorPane(theme)
        self.terminalPane = TerminalPane(theme)
        self.fileTreePane = FileTreePane(theme)
        self.statusPane = StatusPane(theme)

    def compose(self) -> ComposeResult:
        with Horizontal():
            with Vertical(id="left"):
                yield Static(id="tree")
                yield Static(id="status")
            with Vertical(id="right"):
                yield Static(id="editor")
                yield Static(id="terminal")

    def on_mount(self) -> None:
        # divider between the file tree column and the editor column
        self.query_one("#left").styles.border_right = ("solid", Color(*self.theme_colors.separator))
        if self.settings.background is True:
            left = Color(*self.theme_colors.background_left)
            right = Color(*self.theme_colors.background_right)
            for selector, color in (("#tree", left), ("#status", left), ("#editor", right), ("#terminal", right)):
                self.query_one(selector).styles.background = color
        self.set_interval(self.settings.speed / 1000, self.onTick)
        self.refreshPanes()

    def onTick(self) -> None:
        state = self.engine.tick()
        self.refreshPanes()
        if state is EngineState.FINISHED:
            logger.debug( 'Playback finished, leaving' )
            self.exit()

    def refreshPanes(self) -> None:
        editor = self.query_one("#editor", Static)
        size = editor.content_region
        self.engine.setViewportHeight(size.height)
        editor.update( self.editorPane.render(self.engine, size.width, size.height) )

        terminal = self.query_one("#terminal", Static)
        terminal.update( self.terminalPane.render(self.engine, terminal.content_region.height) )

        tree = self.query_one("#tree", Static)
        tree.update( self.fileTreePane.render(self.engine, tree.content_region.width) )

        self.query_one("#status", Static).update( self.statusPane.render(self.engine) )

    def action_skip(self) -> None:
        self.engine.skip()
        self.refreshPanes()

    def action_toggle_pane(self) -> None:
        self.engine.togglePane()
        self.refreshPanes()
