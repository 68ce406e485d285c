#! /usr/bin/env python3

"""
GitLogue replays the commit history of a git repository as live typing in a
terminal dashboard.
"""

from .data_structures import *
from .utils import *
from .config import *
from .syntax import *
from .script import *
from .buffer import *
from .animation import *
from .theme import *
