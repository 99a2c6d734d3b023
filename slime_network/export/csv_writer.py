"""CSV export functionality for the slime mold simulation."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import SimulationState


class CSVWriter:
    """
    Exports per-step network statistics to CSV incrementally.

    Output format:
        step,agents,paths,path_length,efficiency,nodes
        5,3200,412,1236.0,100.0,3
        ...
    """

    FIELDNAMES = ['step', 'agents', 'paths', 'path_length', 'efficiency', 'nodes']

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.file: Optional[object] = None
        self.writer: Optional[csv.DictWriter] = None
        self._is_open = False

    def open(self) -> None:
        """Initialize file and write header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=self.FIELDNAMES)
        self.writer.writeheader()
        self._is_open = True

    def append(self, state: "SimulationState") -> None:
        """Write one row for the given snapshot."""
        if not self._is_open:
            self.open()
        self.writer.writerow(state.to_csv_row())
        self.file.flush()

    def close(self) -> None:
        """Close file handle."""
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None
            self._is_open = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
