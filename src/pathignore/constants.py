"""
Central configuration for ignore pattern processing
"""

import os

# Separator the compiler recognises and the matcher compares against
PATH_SEPARATOR = os.sep

NEGATION_PREFIX = "!"
COMMENT_PREFIX = "#"
ESCAPE_CHAR = "\\"

# Bracket expression syntax
RANGE_OPEN = "["
RANGE_CLOSE = "]"
RANGE_NEGATE = "!"
RANGE_DASH = "-"

ASTERISK = "*"
QUESTION_MARK = "?"
DOUBLE_ASTERISK = "**"

# File the CLI and watcher read when none is given
DEFAULT_IGNORE_FILENAME = ".gitignore"

# Watcher
DEFAULT_DEBOUNCE_SECONDS = 0.5

# Matching
DEFAULT_MATCH_STRATEGY = "first_fit"

# Environment
ENV_LOG_LEVEL = "PATHIGNORE_LOG_LEVEL"
ENV_LOG_FORMAT = "PATHIGNORE_LOG_FORMAT"
ENV_MATCH_STRATEGY = "PATHIGNORE_MATCH_STRATEGY"
DEFAULT_LOG_LEVEL = "WARNING"
