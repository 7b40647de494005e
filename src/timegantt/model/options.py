# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NamedTuple, Optional


class GanttOptions(NamedTuple):
    input_path: Optional[Path]
    output_path: Optional[Path]
    width: float
    height: float
    color_column: Optional[str]
    timezone: str
    show_legend: bool
    show_label: bool
    by_day: bool
