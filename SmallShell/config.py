import os

# Prompt & command language
PROMPT_CHAR = ":"
COMMENT_CHAR = "#"
TOKEN_SEPARATOR = " "
PID_MARKER = "$$"
INPUT_MARKER = "<"
OUTPUT_MARKER = ">"
BACKGROUND_MARKER = "&"

# Built-in names
EXIT_CMD = "exit"
CD_CMD = "cd"
STATUS_CMD = "status"

# Redirection
DEV_NULL = os.devnull
OUTPUT_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
OUTPUT_MODE = 0o644

# Messages
ENTER_FG_ONLY_MSG = "Entering foreground-only mode (& is now ignored)\n"
EXIT_FG_ONLY_MSG = "Exiting foreground-only mode\n"
USAGE_MSG = "No arguments needed.\nExample usage: ./smallsh"
