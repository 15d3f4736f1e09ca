"""Shared constants for vcs-torture."""

import sys
from typing import List


SUPPORTED_VCS: List[str] = ["git", "hg", "svn"]

# Command line limits. These are purposely much lower than the real
# operating system limits.
MAX_COMMAND_LINE_WINDOWS = 2000
MAX_COMMAND_LINE_DEFAULT = 8000

IS_WINDOWS = sys.platform.startswith("win")

MAX_COMMAND_LINE = MAX_COMMAND_LINE_WINDOWS if IS_WINDOWS else MAX_COMMAND_LINE_DEFAULT
LINE_TERMINATOR = b"\r\n" if IS_WINDOWS else b"\n"

# Atoms for unique file names; a name encodes its ordinal in base 16
NAME_ATOMS: List[str] = [
    "at", "bi", "do", "ex", "fa", "go", "hi", "if",
    "ja", "ki", "lo", "me", "no", "of", "pi", "qi",
]

# Atoms for file content
CONTENT_ATOMS: List[str] = [
    "include", "for", "each", "int", "call", "lang", "operation", "overflow",
    "add", "multiply", "sub", "divide", "float", "array", "{", "}",
    "goto", "return", "range", "make", "byte", "var", "sizeof", "sink",
    "[", "]", "(", ")", "append", "copy", ":=", "==",
]

# Column at which generated content wraps
CONTENT_LINE_WIDTH = 100

# Letters available for directory names
MAX_DIRS_PER_DIR = 26

# Identity used for commits so runs don't depend on user configuration
COMMIT_AUTHOR_NAME = "vcs-torture"
COMMIT_AUTHOR_EMAIL = "vcs-torture@localhost"

# Status line refresh interval, in seconds
STATUS_INTERVAL = 0.02
