"""
Tests for the animation engine state machine.
"""

import logging
import random

import pytest

from GitLogue import *


def engineFor(commits, policy=None, **config):
    config.setdefault("order", "asc")
    config.setdefault("speed", 100)
    return AnimationEngine(commits, config=GitLogueConfig(**config), policy=policy,
                           rng=random.Random(7))


def ticksUntil(engine, state, limit=10000):
    for count in range(1, limit + 1):
        if engine.tick() is state:
            return count
    raise AssertionError("engine never reached {}".format(state))


def playedHashes(engine, limit=10000):
    hashes = []
    for _ in range(limit):
        previous = engine.state
        engine.tick()
        if previous is EngineState.IDLE and engine.state is EngineState.PLAYING:
            hashes.append(engine.currentCommit.hash)
        if engine.isFinished:
            return hashes
    raise AssertionError("engine did not finish")


@pytest.fixture
def threeCommits(makeChange, makeCommit):
    return [
        makeCommit([ makeChange("", "a\n") ], message="first", hash="1" * 40),
        makeCommit([ makeChange("a\n", "a\nb\n") ], message="second", hash="2" * 40),
        makeCommit([ makeChange("a\nb\n", "c\n") ], message="third", hash="3" * 40),
    ]


def test_first_tick_loads_a_commit(threeCommits):
    engine = engineFor(threeCommits)
    assert engine.state is EngineState.IDLE
    assert engine.currentCommit is None

    assert engine.tick() is EngineState.PLAYING
    assert engine.currentCommit is threeCommits[0]
    assert engine.script[0] == EditStep(StepType.SWITCH_PANE, pane=ActivePane.EDITOR)


def test_no_commits_finishes_at_once():
    engine = engineFor([])
    assert engine.tick() is EngineState.FINISHED
    assert engine.tick() is EngineState.FINISHED


@pytest.mark.parametrize("order, expected", [
    ("asc", ["1", "2", "3"]),
    ("desc", ["3", "2", "1"]),
])
def test_fixed_orders(threeCommits, order, expected):
    engine = engineFor(threeCommits, order=order)
    assert [ h[0] for h in playedHashes(engine) ] == expected


def test_random_order_plays_every_commit_once(threeCommits):
    engine = engineFor(threeCommits, order="random")
    hashes = playedHashes(engine)
    assert sorted(h[0] for h in hashes) == ["1", "2", "3"]
    assert engine.playedCount == 3


def test_loop_restarts_and_reshuffles(threeCommits):
    engine = engineFor(threeCommits, order="random", loop=True)
    first = list(engine.order)
    engine.orderPosition = len(engine.order)

    index = engine.nextCommitIndex()
    assert engine.orderPosition == 1
    assert index == engine.order[0]
    assert sorted(engine.order) == sorted(first)


def test_loop_never_finishes(threeCommits):
    engine = engineFor(threeCommits, loop=True)
    engine.advance(2000)
    assert not engine.isFinished
    assert engine.playedCount > 3


def test_final_buffer_matches_new_text(threeCommits):
    engine = engineFor(threeCommits)
    ticksUntil(engine, EngineState.FINISHED)
    assert engine.lines == ["c"]


def test_commit_done_moves_on_to_the_next_commit(threeCommits):
    engine = engineFor(threeCommits)
    engine.tick()
    ticksUntil(engine, EngineState.IDLE)

    assert engine.playedCount == 1
    assert engine.script == []
    engine.tick()
    assert engine.currentCommit is threeCommits[1]


def test_tick_costs(makeChange, makeCommit):
    commit = makeCommit([ makeChange("a\n", "ab\n") ])
    engine = engineFor([commit], policy=PlaybackPolicy(terminalTyping="line"))

    # load, then 3 typed characters, 5 file pause ticks, 2 commands,
    # 2 output lines and 15 commit pause ticks
    assert ticksUntil(engine, EngineState.FINISHED) == 1 + 3 + 5 + 2 + 2 + 15


def test_typed_commands_cost_one_tick_per_character(makeChange, makeCommit):
    commit = makeCommit([ makeChange("a\n", "ab\n") ])
    byLine = ticksUntil(engineFor([commit], policy=PlaybackPolicy(terminalTyping="line")), EngineState.FINISHED)
    byChar = ticksUntil(engineFor([commit], policy=PlaybackPolicy(terminalTyping="char")), EngineState.FINISHED)

    assert byChar - byLine == len("git add -A") + len('git commit -m "Add feature"')


def test_timed_context_skip_costs_one_tick_per_line(makeChange, makeCommit):
    commit = makeCommit([ makeChange("a\nb\nc\n", "a\nX\nc\n") ])
    instant = ticksUntil(engineFor([commit], policy=PlaybackPolicy(contextSkip="instant")), EngineState.FINISHED)
    timed = ticksUntil(engineFor([commit], policy=PlaybackPolicy(contextSkip="timed")), EngineState.FINISHED)

    assert timed - instant == 2


def test_deletions_are_free(makeChange, makeCommit):
    engine = engineFor([ makeCommit([ makeChange("x\ny\nz\n", "") ]) ])
    engine.tick()
    engine.tick()

    # SWITCH_PANE, OPEN_FILE and all three deletions, then one pause tick
    assert engine.lines == []
    assert engine.script[engine.position - 1].type is StepType.PAUSE


def test_cursor_blinks(threeCommits):
    engine = engineFor(threeCommits)
    assert engine.blinkTicks == 5
    assert engine.cursorVisible is True

    engine.advance(4)
    assert engine.cursorVisible is True
    engine.advance(1)
    assert engine.cursorVisible is False
    engine.advance(5)
    assert engine.cursorVisible is True


def test_finished_ticks_only_blink():
    engine = engineFor([])
    engine.tick()
    visible = engine.cursorVisible
    engine.advance(engine.blinkTicks)
    assert engine.cursorVisible is not visible
    assert engine.isFinished


def test_skip_applies_the_whole_script(threeCommits):
    engine = engineFor(threeCommits)
    engine.advance(3)
    engine.skip()

    assert engine.state is EngineState.IDLE
    assert engine.lines == ["a"]
    assert engine.activePane is ActivePane.TERMINAL
    assert engine.terminalLines[-2] == "[1111111] first"


def test_skip_the_last_commit_finishes(makeChange, makeCommit):
    engine = engineFor([ makeCommit([ makeChange("a\n", "b\n") ]) ])
    engine.tick()
    engine.skip()
    assert engine.isFinished


def test_skip_outside_playback_does_nothing(threeCommits):
    engine = engineFor(threeCommits)
    engine.skip()
    assert engine.state is EngineState.IDLE
    assert engine.playedCount == 0


def test_transcript(makeChange, makeCommit):
    commit = makeCommit([ makeChange("a\n", "b\nc\n"), makeChange("", "x\n", path="docs/x.md") ],
                        message='Say "hi"\n\nLonger description\n')
    engine = engineFor([commit])
    engine.tick()
    engine.skip()

    assert engine.terminalLines == [
        "~ git add -A",
        '~ git commit -m "Say \\"hi\\""',
        '[abcdef1] Say "hi"',
        " 2 files changed, 3 insertions(+), 1 deletion(-)",
    ]


def test_transcript_is_typed_character_by_character(makeChange, makeCommit):
    engine = engineFor([ makeCommit([ makeChange("a\n", "b\n") ]) ])
    engine.tick()
    while engine.activePane is not ActivePane.TERMINAL:
        engine.tick()
    engine.advance(3)

    assert engine.terminalLines == ["~ git"]


def test_transcript_limit(threeCommits):
    engine = engineFor(threeCommits, policy=PlaybackPolicy(transcriptLimit=3))
    ticksUntil(engine, EngineState.FINISHED)

    assert len(engine.terminalLines) == 3
    assert engine.terminalLines[-2] == "[3333333] third"


def test_inconsistent_file_is_revealed(makeChange, makeCommit, caplog):
    change = makeChange("a\nb\n", "a\nc\n")
    change.hunks[0].lines[1] = DiffLine(content="zzz", tag=LineTag.REMOVED)
    engine = engineFor([ makeCommit([change]) ])

    with caplog.at_level(logging.WARNING, logger="GitLogue.animation"):
        engine.tick()
    assert "revealing" in caplog.text
    assert StepType.REVEAL_FILE in [ step.type for step in engine.script ]

    engine.tick()
    assert engine.lines == ["a", "c"]
    assert engine.currentFileIndex == 0


def test_binary_files_are_not_played(makeChange, makeCommit):
    binary = FileChange(path="logo.png", status=FileStatus.ADDED, hunks=[], binary=True)
    engine = engineFor([ makeCommit([ binary, makeChange("", "text\n", path="README") ]) ])
    engine.tick()

    opened = [ step.fileIndex for step in engine.script if step.type is StepType.OPEN_FILE ]
    assert opened == [1]


def test_files_are_played_in_commit_order(makeChange, makeCommit):
    engine = engineFor([ makeCommit([ makeChange("", "one\n", path="a.txt"),
                                      makeChange("", "two\n", path="b.txt") ]) ])
    seen = []
    engine.tick()
    while engine.state is EngineState.PLAYING:
        engine.tick()
        if engine.currentChange is not None and (not seen or seen[-1] != engine.currentChange.path):
            seen.append(engine.currentChange.path)

    assert seen == ["a.txt", "b.txt"]


def test_toggle_pane(threeCommits):
    engine = engineFor(threeCommits)
    assert engine.activePane is ActivePane.EDITOR
    engine.togglePane()
    assert engine.activePane is ActivePane.TERMINAL
    engine.setActivePane(ActivePane.EDITOR)
    assert engine.activePane is ActivePane.EDITOR


def test_viewport_height_scrolls_the_buffer(makeChange, makeCommit):
    old = "".join("line {}\n".format(i) for i in range(40))
    engine = engineFor([ makeCommit([ makeChange(old, old.replace("line 30\n", "thirty\n")) ]) ])
    engine.setViewportHeight(10)
    engine.tick()
    while engine.cursorLine < 30:
        engine.tick()

    assert engine.scrollOffset <= engine.cursorLine < engine.scrollOffset + 10
    assert engine.scrollOffset > 0


def test_timer_logs_load_time(threeCommits, caplog):
    engine = engineFor(threeCommits, policy=PlaybackPolicy(timer=True))
    with caplog.at_level(logging.DEBUG, logger="GitLogue.animation"):
        engine.tick()
    assert "load:" in caplog.text
    assert engine.timer == {}


def test_changes_are_loaded_only_for_the_current_commit(makeChange):
    loaded = []

    def lazyCommit(hash, oldText, newText):
        def loader():
            loaded.append(hash[0])
            return [ makeChange(oldText, newText) ]
        return CommitMetadata(hash=hash, author="Test Author", date=None,
                              message="commit " + hash[0], loader=loader)

    commits = [ lazyCommit("1" * 40, "", "a\n"), lazyCommit("2" * 40, "a\n", "b\n") ]
    engine = engineFor(commits)
    assert loaded == []
    assert commits[0].changes is None

    engine.tick()
    assert loaded == ["1"]
    assert commits[1].changes is None

    ticksUntil(engine, EngineState.IDLE)
    engine.tick()
    assert loaded == ["1", "2"]
    # the previous commit gave its diffs back
    assert commits[0].changes is None

    ticksUntil(engine, EngineState.FINISHED)
    assert engine.lines == ["b"]
    assert loaded == ["1", "2"]
