#! /usr/bin/env python3

import argparse
import logging
import sys

from GitLogue import *
from GitLogue.app import GitLogueApp
from GitLogue.git import GitRepository

def setFileLogging(path, level=logging.DEBUG):
    # the dashboard owns the terminal, so log records go to a file
    handler = logging.FileHandler(path, encoding="utf-8")

    # create formatter
    formatter = logging.Formatter("{levelname:8} {name}: {message}", style="{")
    handler.setFormatter(formatter)

    # add the handler to the root logger
    logger = logging.getLogger()
    logger.addHandler(handler)
    logger.setLevel(level)

    return logger

def main(argv=None):

    argparser = argparse.ArgumentParser(description="Replay git history as live typing", usage="%(prog)s [options]")

    def str2bool(v):
        return v.lower() in ["true", "yes", "1"]

    _repo = argparser.add_argument_group(title="repository options")
    _repo.add_argument("--path", default=".",
            help="Path inside the git repository to replay (default: %(default)s)")
    _repo.add_argument("--commit", default=None,
            help="Replay only this commit (hash or revision)")

    _play = argparser.add_argument_group(title="playback options, override the config file")
    _play.add_argument("--theme",
            help="Color theme (config default: tokyo-night)")
    _play.add_argument("--speed", type=int,
            help="Typing speed in milliseconds per character (config default: 30)")
    _play.add_argument("--order", choices=ORDERS,
            help="Commit playback order (config default: random)")
    _play.add_argument("--loop", type=str2bool,
            help="Restart after the last commit (config default: false)")
    _play.add_argument("--background", type=str2bool,
            help="Paint opaque pane backgrounds (config default: true)")
    _play.add_argument("--context-skip", dest="contextSkip", choices=["instant", "timed"], default="instant",
            help="Unchanged lines are passed instantly or one per tick (default: %(default)s)")
    _play.add_argument("--terminal-typing", dest="terminalTyping", choices=["char", "line"], default="char",
            help="Type transcript commands per character or per line (default: %(default)s)")

    _config = argparser.add_argument_group(title="configuration")
    _config.add_argument("--config", default=None,
            help="Configuration file (default: ~/.config/gitlogue/config.toml)")
    _config.add_argument("--save-config", dest="saveConfig", action="store_true",
            help="Save the effective settings to the configuration file and exit")
    _config.add_argument("--list-themes", dest="listThemes", action="store_true",
            help="List the built-in themes and exit")

    _debug = argparser.add_argument_group(title="debugging")
    _debug.add_argument("--log-file", dest="logFile", default=None,
            help="Write log records to this file")
    _debug.add_argument("--debug", type=str2bool, default=False,
            help="Log debug records and timing (default: %(default)s)")

    args = argparser.parse_args(argv)

    if args.logFile is not None:
        setFileLogging(args.logFile, logging.DEBUG if args.debug is True else logging.INFO)

    if args.listThemes is True:
        for name in sorted(THEMES):
            print(name)
        return 0

    try:
        config = GitLogueConfig.load(args.config, create=True)
        config = config.replace(theme=args.theme, speed=args.speed, order=args.order,
                                loop=args.loop, background=args.background)
        if args.saveConfig is True:
            config.save(args.config)
            return 0
        theme = Theme.byName(config.theme)
    except ConfigError as e:
        print("error: {}".format(e), file=sys.stderr)
        return 1
    except KeyError as e:
        print("error: {}".format(e.args[0]), file=sys.stderr)
        return 1

    try:
        repo = GitRepository(args.path)
        commits = [repo.commit(args.commit)] if args.commit is not None else repo.commits()
    except RepositoryError as e:
        print("error: {}".format(e), file=sys.stderr)
        return 1

    policy = PlaybackPolicy(contextSkip=args.contextSkip, terminalTyping=args.terminalTyping,
                            timer=args.debug)
    engine = AnimationEngine(commits, config=config, policy=policy, highlighter=Highlighter())
    GitLogueApp(engine, theme, config).run()
    return 0

if __name__ == "__main__":
    sys.exit(main())
