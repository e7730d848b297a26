"""
**********************************************************************************
* Title: display.py
*
* Metadata:
* @version 1.0.0
* -------------------------------------------------------------------------------
* Description:
* Terminal output for the Star Battle solver. The main board is plain ASCII:
* walls are drawn wherever two neighbouring cells belong to different
* regions, and once a solution is known every cell shows a star, an
* eliminated mark or an open mark. A coloured one-character-per-cell region
* view and a human-readable duration formatter are also provided.
*
**********************************************************************************
"""
# display.py
# Description: Board rendering and timing output.

from starbattle.constants import (
    CHAR_CORNER, CHAR_INVALID, CHAR_STAR, CHAR_EMPTY,
    RESET, UNIFIED_COLORS_BG_TERMINAL, BASE64_DISPLAY_ALPHABET
)


def _cell_char(index, result):
    if result is None:
        return CHAR_EMPTY
    if result.is_star(index):
        return CHAR_STAR
    if not result.is_eligible(index):
        return CHAR_INVALID
    return CHAR_EMPTY


def grid_to_string(model, result=None):
    """
    Draws the puzzle as an ASCII board.

    :param GridModel model: The puzzle to draw.
    :param Optional[SolutionResult] result: The solution, if one was found.
    :returns str: The board, one text line per line, ending in a newline.
    """
    dim = model.dim
    regions = model.cell_regions
    lines = [CHAR_CORNER + "----" * (dim - 1) + "---" + CHAR_CORNER]

    for i in range(dim):
        last_row = i + 1 == dim
        curr = ['|']
        below = [CHAR_CORNER if last_row else '|']
        for j in range(dim):
            ind = model.index_of(i, j)
            sid = regions[ind]
            curr.append(f" {_cell_char(ind, result)} ")
            below.append("---" if last_row or sid != regions[ind + dim] else "   ")
            curr.append('|' if j + 1 == dim or sid != regions[ind + 1] else ' ')
            if j + 1 == dim:
                below.append(CHAR_CORNER if last_row else '|')
            else:
                below.append('-')
        lines.append("".join(curr))
        lines.append("".join(below))

    return "\n".join(lines) + "\n"


def display_grid_as_symbols(model, result=None, title="--- Puzzle Regions ---"):
    """
    Returns a coloured view of the regions, one background colour and one
    symbol per region. Stars replace the region symbol once solved.
    """
    lines = [title]
    for r in range(model.dim):
        colored_chars = []
        for c in range(model.dim):
            index = model.index_of(r, c)
            region_id = model.region_of(index)
            color_ansi = UNIFIED_COLORS_BG_TERMINAL[region_id % len(UNIFIED_COLORS_BG_TERMINAL)][2]
            symbol = BASE64_DISPLAY_ALPHABET[region_id] if result is None else _cell_char(index, result)
            colored_chars.append(f"{color_ansi} {symbol} {RESET}")
        lines.append("".join(colored_chars))
    lines.append("-" * len(title))
    return "\n".join(lines)


def format_duration(seconds):
    """Formats a duration in seconds into a human-readable string."""
    if seconds >= 60:
        minutes = int(seconds // 60)
        remaining_seconds = seconds % 60
        if remaining_seconds < 0.01:
            return f"{minutes} min"
        return f"{minutes} min {remaining_seconds:.2f} s"
    if seconds >= 1:
        return f"{seconds:.3f} s"
    if seconds >= 0.001:
        return f"{seconds * 1000:.2f} ms"
    if seconds >= 0.000001:
        return f"{seconds * 1_000_000:.2f} µs"
    return f"{seconds * 1_000_000_000:.0f} ns"
