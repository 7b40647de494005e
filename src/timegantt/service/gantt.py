# SPDX-License-Identifier: MIT

from timegantt.model.options import GanttOptions
from timegantt.service.loader import load_table
from timegantt.service.sanitize import sanitize
from timegantt.service.split import split_table
from timegantt.view.assemble import assemble
from timegantt.view.render import render


def draw_gantt(options: GanttOptions) -> None:
    """Load, clean, optionally split by day, lay out and write the chart."""
    df = load_table(options.input_path, options.timezone)
    df = sanitize(df)
    if options.by_day:
        df = split_table(df, options.timezone)
    plot_df = assemble(df, options)
    render(plot_df, options)
