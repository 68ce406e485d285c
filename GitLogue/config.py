#! /usr/bin/env python3

"""
Configuration of the player.

GitLogueConfig holds the persisted settings of ~/.config/gitlogue/config.toml,
PlaybackPolicy the timing policy of the animation engine. Both are immutable
values handed to the engine and the panes explicitly.
"""

import logging
import os
import dataclasses
from dataclasses import dataclass, fields
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .data_structures import ConfigError

logger = logging.getLogger(__name__)

__all__ = ["GitLogueConfig", "PlaybackPolicy", "configDir", "configPath", "ORDERS"]

ORDERS = ("random", "asc", "desc")

# Template written on first save; values are filled in with str.format
TEMPLATE = """\
# gitlogue configuration file
# All settings are optional and will use defaults if not specified

# Theme to use for syntax highlighting
theme = {theme}

# Typing speed in milliseconds per character
speed = {speed}

# Show background colors (set to false for transparent background)
background = {background}

# Commit playback order: random, asc, or desc
order = {order}

# Loop the animation continuously
loop = {loop}
"""


def configDir():
    return Path(os.path.expanduser("~")) / ".config" / "gitlogue"


def configPath():
    return configDir() / "config.toml"


##
## Persisted settings.
##
## @class GitLogueConfig
##
@dataclass(frozen=True)
class GitLogueConfig:

    ##
    ## @var string config.theme
    ##   Built-in color palette ("tokyo-night")
    ##
    theme: str = "tokyo-night"

    ##
    ## @var int config.speed
    ##   Delay per typed character in milliseconds (30)
    ##
    speed: int = 30

    ##
    ## @var bool config.background
    ##   Paint opaque pane backgrounds (True)
    ##
    background: bool = True

    ##
    ## @var string config.order
    ##   Commit playback order: random, asc or desc ("random")
    ##
    order: str = "random"

    ##
    ## @var bool config.loop
    ##   Restart after the last commit (False)
    ##
    loop: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self):
        if not isinstance(self.theme, str) or not self.theme:
            raise ConfigError("theme must be a non-empty string")
        if isinstance(self.speed, bool) or not isinstance(self.speed, int) or self.speed <= 0:
            raise ConfigError("speed must be a positive integer")
        if not isinstance(self.background, bool):
            raise ConfigError("background must be true or false")
        if self.order not in ORDERS:
            raise ConfigError("order must be one of {}".format(", ".join(ORDERS)))
        if not isinstance(self.loop, bool):
            raise ConfigError("loop must be true or false")

    def replace( self, **changes ):
        changes = dict( (k, v) for k, v in changes.items() if v is not None )
        return dataclasses.replace(self, **changes)


    ##
    ## Load the configuration file. A missing file yields the defaults, and
    ## with create set the commented template is written there first.
    ##
    ## @param Path path Configuration file, defaults to configPath()
    ## @param bool create Write the defaults to a missing file
    ## @return GitLogueConfig
    ## @raise ConfigError File cannot be read or parsed, or holds invalid values
    ##
    @classmethod
    def load( cls, path=None, create=False ):

        path = Path(path) if path is not None else configPath()
        if not path.exists():
            config = cls()
            if create is False:
                logger.debug( 'No configuration file at {}, using defaults'.format(path) )
                return config
            logger.info( 'No configuration file at {}, writing defaults'.format(path) )
            try:
                config.save(path)
            except ConfigError as e:
                logger.warning( 'Cannot create configuration file: {}'.format(e) )
            return config

        try:
            document = tomlkit.parse( path.read_text(encoding="utf-8") )
        except OSError as e:
            raise ConfigError("Failed to read config file: {}: {}".format(path, e)) from e
        except TOMLKitError as e:
            raise ConfigError("Failed to parse config file: {}: {}".format(path, e)) from e

        values = {}
        for f in fields(cls):
            if f.name in document:
                value = document[f.name]
                # unwrap tomlkit items into plain Python values
                values[f.name] = value.unwrap() if hasattr(value, "unwrap") else value

        try:
            config = cls(**values)
        except ConfigError as e:
            raise ConfigError("{} (config file: {})".format(e, path)) from e
        logger.debug( 'Loaded configuration from {}: {}'.format(path, config) )
        return config


    ##
    ## Save the configuration. A new file gets a commented template, an
    ## existing file is edited in place so that comments and unknown keys
    ## survive.
    ##
    ## @param Path path Configuration file, defaults to configPath()
    ## @raise ConfigError File cannot be read, parsed or written
    ##
    def save( self, path=None ):

        path = Path(path) if path is not None else configPath()

        try:
            if path.exists():
                try:
                    document = tomlkit.parse( path.read_text(encoding="utf-8") )
                except TOMLKitError as e:
                    raise ConfigError("Failed to parse config file: {}: {}".format(path, e)) from e
                for f in fields(self):
                    document[f.name] = getattr(self, f.name)
                contents = tomlkit.dumps(document)
            else:
                contents = TEMPLATE.format( **dict(
                        (f.name, tomlkit.item(getattr(self, f.name)).as_string()) for f in fields(self) ) )
                path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")
        except OSError as e:
            raise ConfigError("Failed to write config file: {}: {}".format(path, e)) from e

        logger.debug( 'Saved configuration to {}'.format(path) )


##
## Timing policy of the animation engine, not persisted.
##
## @class PlaybackPolicy
##
@dataclass(frozen=True)
class PlaybackPolicy:

    # "instant": unchanged lines are passed without spending a tick,
    # "timed": every unchanged line costs one tick
    contextSkip: str = "instant"

    # "char": transcript commands are typed one character per tick,
    # "line": each command appears at once
    terminalTyping: str = "char"

    # Cursor blink period in milliseconds
    blinkInterval: int = 500

    # Pause after each file and after each commit in milliseconds
    filePause: int = 500
    commitPause: int = 1500

    # Number of transcript lines kept
    transcriptLimit: int = 200

    # Log snapshot build timing
    timer: bool = False

    def __post_init__(self):
        if self.contextSkip not in ("instant", "timed"):
            raise ValueError("contextSkip must be 'instant' or 'timed'")
        if self.terminalTyping not in ("char", "line"):
            raise ValueError("terminalTyping must be 'char' or 'line'")
        if isinstance(self.transcriptLimit, bool) or not isinstance(self.transcriptLimit, int) \
                or self.transcriptLimit < 1:
            raise ValueError("transcriptLimit must be a positive integer")

    def ticks( self, milliseconds, speed ):
        return max(1, milliseconds // max(1, speed))
