"""
**********************************************************************************
* Title: constants.py
*
* Metadata:
* @version 1.0.0
* -------------------------------------------------------------------------------
* Description:
* This module contains all the static constants for the Star Battle solver. It
* is the single source of truth for fixed values such as the supported plain
* text puzzle sizes, the SBN conversion maps, the characters used to draw a
* board and the terminal colour table. This module has no dependencies on
* other package modules to prevent circular imports.
*
**********************************************************************************
"""
# constants.py
# Description: Contains all the static constants for the Star Battle solver.

# --- PLAIN TEXT PUZZLE FORMAT ---
# Region characters in a plain text puzzle, mapped to region ids 0-15.
REGION_CHARS = '0123456789abcdef'
REGION_CHAR_TO_INT = {c: i for i, c in enumerate(REGION_CHARS)}

# Total cell count -> (dimension, stars per region/row/column).
SUPPORTED_TEXT_SIZES = {
    10 * 10: (10, 2),
    14 * 14: (14, 3),
}

DEFAULT_INPUT_FILE = 'input.txt'
DEFAULT_DEBUG_LOG = 'debug_log.txt'
TRACE_LOGGER_NAME = 'starbattle.trace'

# --- SBN (STAR BATTLE NOTATION) ---
SBN_B64_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_'
SBN_CHAR_TO_INT = {c: i for i, c in enumerate(SBN_B64_ALPHABET)}
SBN_INT_TO_CHAR = {i: c for i, c in enumerate(SBN_B64_ALPHABET)}
SBN_CODE_TO_DIM_MAP = {
    '55': 5,  '66': 6,  '77': 7,  '88': 8,  '99': 9, 'AA': 10, 'BB': 11, 'CC': 12, 'DD': 13,
    'EE': 14, 'FF': 15, 'GG': 16, 'HH': 17, 'II': 18, 'JJ': 19, 'KK': 20, 'LL': 21, 'MM': 22,
    'NN': 23, 'OO': 24, 'PP': 25
}
DIM_TO_SBN_CODE_MAP = {v: k for k, v in SBN_CODE_TO_DIM_MAP.items()}
SBN_HEADER_LEN = 4  # size code (2) + star digit (1) + flag (1)
SBN_FLAG_PLAIN = 'W'

# --- BOARD DRAWING ---
CHAR_CORNER = 'O'
CHAR_INVALID = 'o'
CHAR_STAR = '*'
CHAR_EMPTY = '_'

# --- SEARCH STATUS ---
STATUS_READY = 'ready'
STATUS_SEARCHING = 'searching'
STATUS_SOLVED = 'solved'
STATUS_EXHAUSTED = 'exhausted'

# --- TERMINAL COLORS ---
RESET = "\033[0m"
UNIFIED_COLORS_BG_TERMINAL = [
    ("Bright Red",(255,204,204),"\033[48;2;255;204;204m\033[38;2;0;0;0m"),("Bright Green",(204,255,204),"\033[48;2;204;255;204m\033[38;2;0;0;0m"),
    ("Bright Yellow",(255,255,204),"\033[48;2;255;255;204m\033[38;2;0;0;0m"),("Bright Blue",(204,229,255),"\033[48;2;204;229;255m\033[38;2;0;0;0m"),
    ("Bright Magenta",(255,204,255),"\033[48;2;255;204;255m\033[38;2;0;0;0m"),("Bright Cyan",(204,255,255),"\033[48;2;204;255;255m\033[38;2;0;0;0m"),
    ("Light Orange",(255,229,204),"\033[48;2;255;229;204m\033[38;2;0;0;0m"),("Light Purple",(229,204,255),"\033[48;2;229;204;255m\033[38;2;0;0;0m"),
    ("Light Gray",(224,224,224),"\033[48;2;224;224;224m\033[38;2;0;0;0m"),("Mint",(210,240,210),"\033[48;2;210;240;210m\033[38;2;0;0;0m"),
    ("Peach",(255,218,185),"\033[48;2;255;218;185m\033[38;2;0;0;0m"),("Sky Blue",(173,216,230),"\033[48;2;173;216;230m\033[38;2;0;0;0m"),
]
BASE64_DISPLAY_ALPHABET = SBN_B64_ALPHABET
