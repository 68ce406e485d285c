#! /usr/bin/env python3

"""
GitLogue animation engine: replays commits as live typing.

The engine is a tick driven state machine. Every commit becomes a timeline
of steps which the engine advances one unit per tick:

    IDLE  -->  PLAYING  -->  COMMIT_DONE  -->  IDLE (next commit)
                                         \\->  FINISHED (last commit, no loop)

Loading a commit (IDLE tick) builds a DiffSnapshot and an edit script for
every changed file and wraps them into the commit timeline:

  SWITCH_PANE editor
  for every file:
      OPEN_FILE           buffer reset to the old text, cursor at (0, 0)
      edit steps          SKIP_CONTEXT_LINE, DELETE_LINE, TYPE_CHAR
        or REVEAL_FILE    new text shown at once if the hunks are inconsistent
      PAUSE ...
  SWITCH_PANE terminal
  TERMINAL_COMMAND, TERMINAL_CHAR ...   "git add" and "git commit" typed
  TERMINAL_OUTPUT ...                   commit summary
  PAUSE ...

Each step has a cost in ticks (see stepCost). A tick applies every pending
zero cost step and then exactly one costed step, so deletions, file
switches and (by default) unchanged lines never slow the typing down.

Datastructures:

class AnimationEngine:
  .commits[]            CommitMetadata list, oldest first
  .config               GitLogueConfig
  .policy               PlaybackPolicy
  .buffer               PlaybackBuffer of the file being played
  .state                EngineState
  .script[]             EditStep timeline of the current commit
  .position             index of the next step in script
  .snapshots{}          file index -> DiffSnapshot of the current commit
  .terminalLines[]      transcript, commands start with "~ "
  .activePane           ActivePane
  .cursorVisible        blink flag
  .tickCount            ticks since start
  .order[]              commit indices in playback order
  .orderPosition        next position in order
  .currentCommit        CommitMetadata being played, the only one with changes loaded
  .currentFileIndex     index of the file in currentCommit.changes
"""

import logging
import random
import time

from .data_structures import *
from .buffer import PlaybackBuffer
from .config import GitLogueConfig, PlaybackPolicy
from .script import buildSnapshot, EditScriptBuilder

logger = logging.getLogger(__name__)

__all__ = ["AnimationEngine"]

# Steps applied without spending a tick
FREE_STEPS = (StepType.DELETE_LINE, StepType.OPEN_FILE, StepType.REVEAL_FILE, StepType.SWITCH_PANE)

# Steps handled by the playback buffer
EDIT_STEPS = (StepType.SKIP_CONTEXT_LINE, StepType.DELETE_LINE, StepType.TYPE_CHAR)


##
## Animation engine class.
##
## @class AnimationEngine
##
class AnimationEngine:

    ##
    ## Constructor.
    ##
    ## @param list commits CommitMetadata elements, oldest first
    ## @param GitLogueConfig config Settings (speed, order, loop)
    ## @param PlaybackPolicy policy Timing policy
    ## @param Highlighter highlighter Syntax highlighter, None disables colors
    ## @param random.Random rng Random source for the "random" order
    ## @param int viewportHeight Number of visible editor lines
    ##
    def __init__( self, commits, config=None, policy=None, highlighter=None, rng=None, viewportHeight=20 ):

        self.commits = list(commits)
        self.config = config if config is not None else GitLogueConfig()
        self.policy = policy if policy is not None else PlaybackPolicy()
        self.highlighter = highlighter
        self.rng = rng if rng is not None else random.Random()
        self.viewportHeight = viewportHeight

        self.builder = EditScriptBuilder()
        self.buffer = PlaybackBuffer()
        self.state = EngineState.IDLE

        self.script = []
        self.position = 0
        self.snapshots = {}

        self.terminalLines = []
        self.activePane = ActivePane.EDITOR
        self.cursorVisible = True
        self.tickCount = 0
        self.blinkTicks = self.policy.ticks(self.policy.blinkInterval, self.config.speed)

        self.orderPosition = 0
        self.currentCommit = None
        self.currentFileIndex = None

        # @var int playedCount Number of commits played to the end
        self.playedCount = 0

        # @var object timer Debug timer array: string 'label' => float seconds.
        self.timer = {}

        self.order = self.makeOrder()


    # Read-only accessors for the render panes

    @property
    def lines(self):
        return self.buffer.lines

    @property
    def cursorLine(self):
        return self.buffer.cursorLine

    @property
    def cursorCol(self):
        return self.buffer.cursorCol

    @property
    def scrollOffset(self):
        return self.buffer.scrollOffset

    @property
    def lineOffset(self):
        return self.buffer.lineOffset

    @property
    def currentChange(self):
        if self.currentCommit is None or self.currentFileIndex is None:
            return None
        return self.currentCommit.changes[self.currentFileIndex]

    @property
    def isFinished(self):
        return self.state is EngineState.FINISHED


    ##
    ## Commit indices in playback order.
    ##
    def makeOrder(self):

        indices = list(range(len(self.commits)))
        if self.config.order == "desc":
            indices.reverse()
        elif self.config.order == "random":
            self.rng.shuffle(indices)
        return indices

    ##
    ## Next commit index, or None when the order is exhausted and looping
    ## is off. Random order is reshuffled on wraparound.
    ##
    def nextCommitIndex(self):

        if self.orderPosition >= len(self.order):
            if self.config.loop is not True or not self.order:
                return None
            if self.config.order == "random":
                self.order = self.makeOrder()
            self.orderPosition = 0
            logger.debug( 'Looping back to the first commit' )

        index = self.order[self.orderPosition]
        self.orderPosition += 1
        return index


    ##
    ## Advance the engine by one tick.
    ##
    ## @return EngineState State after the tick
    ##
    def tick(self):

        self.tickCount += 1
        if self.tickCount % self.blinkTicks == 0:
            self.cursorVisible = not self.cursorVisible

        if self.state is EngineState.IDLE:
            self.startNextCommit()
        elif self.state is EngineState.PLAYING:
            self.step()

        return self.state

    ##
    ## Advance by a number of ticks, without any timer.
    ##
    def advance( self, ticks ):
        for _ in range(ticks):
            self.tick()
        return self.state


    ##
    ## Apply all remaining steps of the current commit at once and finish
    ## it. The buffer always goes through the complete script.
    ##
    def skip(self):

        if self.state is not EngineState.PLAYING:
            return
        logger.debug( 'Skipping {} remaining steps'.format(len(self.script) - self.position) )
        while self.position < len(self.script):
            step = self.script[self.position]
            self.position += 1
            self.applyStep(step)
        self.finishCommit()


    def setActivePane( self, pane ):
        self.activePane = pane

    def togglePane(self):
        if self.activePane is ActivePane.EDITOR:
            self.activePane = ActivePane.TERMINAL
        else:
            self.activePane = ActivePane.EDITOR

    def setViewportHeight( self, height ):
        self.viewportHeight = height
        self.buffer.updateScroll(height)


    ##
    ## Apply pending zero cost steps and one costed step.
    ##
    def step(self):

        while self.position < len(self.script):
            step = self.script[self.position]
            self.position += 1
            self.applyStep(step)
            if self.stepCost(step) > 0:
                break

        if self.position >= len(self.script):
            self.finishCommit()


    def stepCost( self, step ):

        if step.type in FREE_STEPS:
            return 0
        if step.type is StepType.SKIP_CONTEXT_LINE:
            return 0 if self.policy.contextSkip == "instant" else 1
        return 1


    def applyStep( self, step ):

        if step.type in EDIT_STEPS:
            self.buffer.apply(step)
        elif step.type is StepType.OPEN_FILE:
            self.currentFileIndex = step.fileIndex
            self.buffer.reset( self.snapshots[step.fileIndex] )
        elif step.type is StepType.REVEAL_FILE:
            self.currentFileIndex = step.fileIndex
            self.buffer.reveal( self.snapshots[step.fileIndex] )
        elif step.type is StepType.SWITCH_PANE:
            self.activePane = step.pane
        elif step.type is StepType.TERMINAL_COMMAND:
            self.appendTerminalLine( "~ " + (step.text or "") )
        elif step.type is StepType.TERMINAL_CHAR:
            self.terminalLines[-1] += step.char
        elif step.type is StepType.TERMINAL_OUTPUT:
            self.appendTerminalLine(step.text)

        self.buffer.updateScroll(self.viewportHeight)

    def appendTerminalLine( self, text ):
        self.terminalLines.append(text)
        excess = len(self.terminalLines) - self.policy.transcriptLimit
        if excess > 0:
            del self.terminalLines[:excess]


    ##
    ## Make the next commit current: build its snapshots and timeline.
    ##
    def startNextCommit(self):

        index = self.nextCommitIndex()
        if index is None:
            self.state = EngineState.FINISHED
            logger.debug( 'Playback finished after {} commits'.format(self.playedCount) )
            return

        self.loadCommit( self.commits[index] )
        self.state = EngineState.PLAYING

    def loadCommit( self, commit ):

        if self.policy.timer is True:
            self.time( 'load' )

        if self.currentCommit is not None and self.currentCommit is not commit:
            self.currentCommit.release()
        self.currentCommit = commit
        changes = commit.loadChanges()
        self.currentFileIndex = None
        self.buffer.clear()
        self.snapshots = {}
        self.position = 0

        speed = self.config.speed
        filePause = [ EditStep(StepType.PAUSE) ] * self.policy.ticks(self.policy.filePause, speed)
        commitPause = [ EditStep(StepType.PAUSE) ] * self.policy.ticks(self.policy.commitPause, speed)

        script = [ EditStep(StepType.SWITCH_PANE, pane=ActivePane.EDITOR) ]
        for fileIndex, change in enumerate(changes):
            if change.binary is True:
                logger.debug( 'Skipping binary file {}'.format(change.path) )
                continue

            snapshot = buildSnapshot(change, self.highlighter)
            self.snapshots[fileIndex] = snapshot
            try:
                edits = self.builder.build(change, snapshot)
            except EditScriptError as e:
                logger.warning( 'Cannot animate {}, revealing it instead: {}'.format(change.path, e) )
                script.append( EditStep(StepType.REVEAL_FILE, fileIndex=fileIndex) )
            else:
                script.append( EditStep(StepType.OPEN_FILE, fileIndex=fileIndex) )
                script.extend(edits)
            script.extend(filePause)

        script.extend( self.transcript(commit) )
        script.extend(commitPause)
        self.script = script

        logger.debug( 'Commit {}: {} files, {} steps'.format(commit.shortHash, len(changes), len(script)) )
        if self.policy.timer is True:
            self.timeEnd( 'load' )


    ##
    ## Terminal transcript of a commit.
    ##
    def transcript( self, commit ):

        subject = commit.subject
        additions = sum(change.additions for change in commit.changes)
        deletions = sum(change.deletions for change in commit.changes)
        files = len(commit.changes)

        steps = [ EditStep(StepType.SWITCH_PANE, pane=ActivePane.TERMINAL) ]
        steps.extend( self.commandSteps("git add -A") )
        steps.extend( self.commandSteps('git commit -m "{}"'.format(subject.replace('"', '\\"'))) )
        steps.append( EditStep(StepType.TERMINAL_OUTPUT, text="[{}] {}".format(commit.shortHash, subject)) )
        steps.append( EditStep(StepType.TERMINAL_OUTPUT,
                text=" {} file{} changed, {} insertion{}(+), {} deletion{}(-)".format(
                        files, "" if files == 1 else "s",
                        additions, "" if additions == 1 else "s",
                        deletions, "" if deletions == 1 else "s")) )
        return steps

    def commandSteps( self, command ):

        if self.policy.terminalTyping == "line":
            return [ EditStep(StepType.TERMINAL_COMMAND, text=command) ]
        steps = [ EditStep(StepType.TERMINAL_COMMAND, text="") ]
        steps.extend( EditStep(StepType.TERMINAL_CHAR, char=char) for char in command )
        return steps


    def finishCommit(self):

        self.state = EngineState.COMMIT_DONE
        self.playedCount += 1
        logger.debug( 'Commit {} done'.format(self.currentCommit.shortHash) )

        self.script = []
        self.position = 0
        self.snapshots = {}

        if self.orderPosition >= len(self.order) and self.config.loop is not True:
            self.state = EngineState.FINISHED
        else:
            self.state = EngineState.IDLE


    ##
    ## Start timer 'label'.
    ##
    def time( self, label ):
        self.timer[label] = time.time()

    ##
    ## Stop timer 'label' and log the time in seconds since start.
    ##
    def timeEnd( self, label ):
        diff = 0
        if label in self.timer:
            diff = time.time() - self.timer.pop(label)
            logger.debug( "{}: {:.2g} s".format(label, diff) )
        return diff
