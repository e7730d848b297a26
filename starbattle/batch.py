"""
**********************************************************************************
* Title: batch.py
*
* Metadata:
* @version 1.0.0
* -------------------------------------------------------------------------------
* Description:
* Solves many SBN-encoded puzzles in one run. Puzzles are read one per line
* from a file, or from every file in a directory, and solved in order behind
* a tqdm progress bar. Lines that do not decode to a valid puzzle are
* recorded in the report rather than stopping the run.
*
**********************************************************************************
"""
# batch.py
# Description: Batch solving of SBN puzzle files.

import os
import logging
from dataclasses import dataclass, field

from tqdm import tqdm

from starbattle.grid import ConstructionError
from starbattle.puzzle_handler import decode_sbn, FileAccessError
from starbattle.solver import SearchEngine

OUTCOME_SOLVED = 'solved'
OUTCOME_UNSOLVABLE = 'unsolvable'
OUTCOME_MALFORMED = 'malformed'


@dataclass
class BatchEntry:
    sbn: str
    outcome: str
    elapsed: float = 0.0
    detail: str = ''


@dataclass
class BatchReport:
    entries: list = field(default_factory=list)

    def count(self, outcome):
        return sum(1 for entry in self.entries if entry.outcome == outcome)

    @property
    def solved(self):
        return self.count(OUTCOME_SOLVED)

    @property
    def unsolvable(self):
        return self.count(OUTCOME_UNSOLVABLE)

    @property
    def malformed(self):
        return self.count(OUTCOME_MALFORMED)


def read_sbn_lines(path):
    """
    Reads non-blank SBN lines from a file, or from every file in a directory
    in sorted filename order.

    :raises FileAccessError: If the path is neither a readable file nor a directory.
    """
    if os.path.isdir(path):
        filepaths = [os.path.join(path, name) for name in sorted(os.listdir(path))]
        filepaths = [p for p in filepaths if os.path.isfile(p)]
    elif os.path.isfile(path):
        filepaths = [path]
    else:
        raise FileAccessError(f"Path '{path}' is not a valid file or directory")

    lines = []
    for filepath in filepaths:
        try:
            with open(filepath, 'r', encoding='utf-8', errors='replace') as f:
                lines.extend(line.strip() for line in f if line.strip())
        except OSError as e:
            raise FileAccessError(f"Unable to open file {filepath}: {e.strerror or e}") from e
    return lines


def solve_sbn_batch(lines, show_progress=True):
    """
    Decodes and solves every SBN line in order.

    :param Iterable[str] lines: SBN puzzle strings.
    :param bool show_progress: Whether to draw a tqdm progress bar.
    :returns BatchReport: One entry per line.
    """
    report = BatchReport()
    for sbn in tqdm(lines, desc="Solving puzzles", unit="puzzle", disable=not show_progress):
        try:
            model = decode_sbn(sbn)
        except ConstructionError as e:
            logging.warning(f"Skipping malformed SBN '{sbn}': {e}")
            report.entries.append(BatchEntry(sbn=sbn, outcome=OUTCOME_MALFORMED, detail=str(e)))
            continue

        engine = SearchEngine(model)
        result = engine.solve()
        outcome = OUTCOME_SOLVED if result is not None else OUTCOME_UNSOLVABLE
        report.entries.append(BatchEntry(sbn=sbn, outcome=outcome, elapsed=engine.elapsed))

    logging.info(f"Batch complete: {report.solved} solved, {report.unsolvable} unsolvable, "
                 f"{report.malformed} malformed")
    return report
