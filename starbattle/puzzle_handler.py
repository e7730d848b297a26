"""
**********************************************************************************
* Title: puzzle_handler.py
*
* Metadata:
* @version 1.0.0
* -------------------------------------------------------------------------------
* Description:
* This module is responsible for turning puzzle descriptions into GridModel
* instances. It reads the plain text region format (one hex character per
* cell, 10x10 with two stars or 14x14 with three) from strings and files, and
* converts between GridModels and the compact "SBN" (Star Battle Notation)
* format, whose region layout is stored as base-64 encoded border bits and is
* rebuilt with a flood fill.
*
**********************************************************************************
"""
# puzzle_handler.py
# Description: Plain text and SBN puzzle parsing, plus SBN encoding.

# --- IMPORTS AND LOGGING ---
import math
import logging
from collections import deque

from starbattle.grid import GridModel, ConstructionError
from starbattle.constants import (
    REGION_CHAR_TO_INT, SUPPORTED_TEXT_SIZES, SBN_B64_ALPHABET, SBN_CHAR_TO_INT,
    SBN_INT_TO_CHAR, SBN_CODE_TO_DIM_MAP, DIM_TO_SBN_CODE_MAP, SBN_HEADER_LEN, SBN_FLAG_PLAIN
)


class FileAccessError(OSError):
    """Raised when a puzzle file cannot be opened or read."""


# --- PLAIN TEXT FORMAT ---
def parse_grid_text(text):
    """
    Parses a plain text puzzle into a GridModel.

    Every character '0'-'9' or 'a'-'f' is one cell, read row-major, whose
    region id is the character's hex value. Anything else is ignored. The
    cell count decides the puzzle size: 100 cells is a 10x10 two-star puzzle,
    196 cells a 14x14 three-star puzzle.

    :param str text: The raw puzzle text.
    :returns GridModel: The validated puzzle.
    :raises ConstructionError: On an unsupported cell count or a region count
        that does not match the dimension.
    """
    cells = [REGION_CHAR_TO_INT[ch] for ch in text if ch in REGION_CHAR_TO_INT]

    size = SUPPORTED_TEXT_SIZES.get(len(cells))
    if size is None:
        supported = ", ".join(str(n) for n in sorted(SUPPORTED_TEXT_SIZES))
        raise ConstructionError(f"invalid input size provided: {len(cells)} cells (expected one of {supported})")
    dim, stars = size

    region_count = len(set(cells))
    if region_count != dim:
        raise ConstructionError(f"unexpected region count provided: {region_count} (expected {dim})")

    model = GridModel.build(cells, dim, stars)
    logging.info(f"Parsed a {dim}x{dim} grid with {stars} stars per region.")
    return model


def read_puzzle_file(path):
    """
    Reads a whole puzzle file and returns its contents with line breaks removed.
    Undecodable bytes become U+FFFD, which the parser skips like any other noise.

    :raises FileAccessError: If the file cannot be opened or read.
    """
    logging.info(f"Reading puzzle from: {path}")
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return "".join(line.rstrip('\r\n') for line in f)
    except OSError as e:
        raise FileAccessError(f"Unable to open file {path}: {e.strerror or e}") from e


def load_puzzle_file(path):
    """Reads and parses a plain text puzzle file."""
    return parse_grid_text(read_puzzle_file(path))


# --- SBN FORMAT ---
def decode_sbn(sbn_string):
    """
    Decodes an SBN string into a GridModel.

    The header holds a two-character size code, the star count and a flag
    character. It is followed by the vertical borders (row by row) and the
    horizontal borders (column by column), packed six bits per character and
    left-padded with zero bits. Regions are rebuilt by flood fill and numbered
    from 0 in row-major discovery order.

    :param str sbn_string: The SBN puzzle string.
    :returns GridModel: The decoded puzzle.
    :raises ConstructionError: If the string is malformed or its layout is not a valid puzzle.
    """
    sbn_string = sbn_string.strip()
    if len(sbn_string) < SBN_HEADER_LEN:
        raise ConstructionError(f"SBN string '{sbn_string}' is too short")

    dim = SBN_CODE_TO_DIM_MAP.get(sbn_string[0:2])
    if not dim:
        raise ConstructionError(f"unknown SBN size code '{sbn_string[0:2]}'")
    if not sbn_string[2].isdigit():
        raise ConstructionError(f"invalid SBN star count '{sbn_string[2]}'")
    stars = int(sbn_string[2])

    border_bits_needed = 2 * dim * (dim - 1)
    border_chars = math.ceil(border_bits_needed / 6)
    region_data = sbn_string[SBN_HEADER_LEN:SBN_HEADER_LEN + border_chars].ljust(border_chars, SBN_B64_ALPHABET[0])
    invalid = sorted({c for c in region_data if c not in SBN_CHAR_TO_INT})
    if invalid:
        raise ConstructionError(f"invalid SBN characters: {''.join(invalid)}")

    full_bitfield = "".join(bin(SBN_CHAR_TO_INT[c])[2:].zfill(6) for c in region_data)[-border_bits_needed:]
    v_bits, h_bits = full_bitfield[:dim * (dim - 1)], full_bitfield[dim * (dim - 1):]
    region_grid = reconstruct_grid_from_borders(dim, v_bits, h_bits)

    region_count = max(max(row) for row in region_grid) + 1
    if region_count != dim:
        raise ConstructionError(f"SBN layout has {region_count} regions, expected {dim}")
    return GridModel.from_rows(region_grid, stars)


def _open_neighbours(dim, v_bits, h_bits, index):
    """Yields the orthogonal neighbours of a cell that no border separates it from."""
    row, col = divmod(index, dim)
    span = dim - 1
    # Vertical borders are stored row by row, horizontal ones column by column
    if col < span and v_bits[row * span + col] == '0':
        yield index + 1
    if col > 0 and v_bits[row * span + col - 1] == '0':
        yield index - 1
    if row < span and h_bits[col * span + row] == '0':
        yield index + dim
    if row > 0 and h_bits[col * span + row - 1] == '0':
        yield index - dim


def reconstruct_grid_from_borders(dim, v_bits, h_bits):
    """
    Rebuilds the region grid from SBN border bits. A '0' bit means the two
    cells share a region. Each unlabelled cell met in row-major order starts
    a new region, which is flooded through every open border.

    :returns list[list[int]]: Region ids, one row per list.
    """
    labels = [None] * (dim * dim)
    next_id = 0
    for start in range(dim * dim):
        if labels[start] is not None:
            continue
        labels[start] = next_id
        pending = deque([start])
        while pending:
            for neighbour in _open_neighbours(dim, v_bits, h_bits, pending.popleft()):
                if labels[neighbour] is None:
                    labels[neighbour] = next_id
                    pending.append(neighbour)
        next_id += 1
    return [labels[r * dim:(r + 1) * dim] for r in range(dim)]


def encode_to_sbn(model):
    """
    Encodes a GridModel as an SBN string.

    :returns Optional[str]: The SBN string, or None if the dimension has no SBN size code.
    """
    dim = model.dim
    sbn_code = DIM_TO_SBN_CODE_MAP.get(dim)
    if not sbn_code or model.stars_per_region > 9:
        return None
    grid = model.rows()

    vertical_bits = ['1' if grid[r][c] != grid[r][c + 1] else '0' for r in range(dim) for c in range(dim - 1)]
    horizontal_bits = ['1' if grid[r][c] != grid[r + 1][c] else '0' for c in range(dim) for r in range(dim - 1)]
    clean_bitfield = "".join(vertical_bits) + "".join(horizontal_bits)

    padding_needed = (6 - len(clean_bitfield) % 6) % 6
    padded_bitfield = ('0' * padding_needed) + clean_bitfield
    region_data = "".join(SBN_INT_TO_CHAR[int(padded_bitfield[i:i + 6], 2)]
                          for i in range(0, len(padded_bitfield), 6))

    return f"{sbn_code}{model.stars_per_region}{SBN_FLAG_PLAIN}{region_data}"
