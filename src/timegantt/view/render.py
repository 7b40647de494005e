# SPDX-License-Identifier: MIT

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates  # noqa: E402
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
from matplotlib.axes import Axes  # noqa: E402
from matplotlib.backend_bases import FigureCanvasBase  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from matplotlib.patches import Patch  # noqa: E402
from matplotlib.ticker import FixedLocator, MultipleLocator  # noqa: E402

from timegantt.error import RenderError, UnsupportedOutputError  # noqa: E402
from timegantt.model.options import GanttOptions  # noqa: E402

logger = logging.getLogger(__name__)

NO_FILL_COLOR = "grey"
BY_DAY_MAJOR_HOURS = [0, 4, 8, 12, 16, 20, 24]
LABEL_BOX = {"boxstyle": "round,pad=0.2", "facecolor": "white", "alpha": 0.8}


def check_output_path(output_path: Optional[Path]) -> str:
    """
    Validate the output destination and return the image format for it.

    Raises:
        UnsupportedOutputError: If no output path is given or it is stdout ("-")
        RenderError: If the file suffix is not an image format matplotlib writes
    """
    if output_path is None or str(output_path) == "-":
        raise UnsupportedOutputError(
            "Writing the generated image to stdout is not supported, use --output"
        )
    image_format = output_path.suffix.lstrip(".").lower()
    supported = FigureCanvasBase.get_supported_filetypes()
    if image_format not in supported:
        raise RenderError(
            f"Cannot write '{output_path}': unsupported image format "
            f"'{image_format}', expected one of {', '.join(sorted(supported))}"
        )
    return image_format


def render(plot_df: pd.DataFrame, options: GanttOptions) -> None:
    """
    Draw the assembled rectangles and write the image to `options.output_path`.

    The image is written to a temporary file next to the destination and moved
    into place once complete, so a failure never leaves a partial file behind.

    Raises:
        UnsupportedOutputError: If the output is stdout
        RenderError: If the image cannot be written
    """
    image_format = check_output_path(options.output_path)
    assert options.output_path is not None

    if plot_df.empty:
        logger.warning("no intervals to draw, writing an empty chart")

    fig, ax = plt.subplots(figsize=(options.width, options.height))
    try:
        _draw_rectangles(ax, plot_df, options)
        if options.by_day:
            _configure_by_day_axes(ax, plot_df)
        else:
            _configure_timeline_axes(ax, options.timezone)
        fig.tight_layout()
        _save_atomically(fig, options.output_path, image_format)
    finally:
        plt.close(fig)

    logger.info("wrote %d rectangles to %s", len(plot_df), options.output_path)


def _draw_rectangles(ax: Axes, plot_df: pd.DataFrame, options: GanttOptions) -> None:
    if plot_df.empty:
        return

    fills = [fill for fill in plot_df["fill"] if fill is not None]
    categories = sorted(set(fills))
    palette = _palette(categories)

    colors = [
        palette[fill] if fill is not None else NO_FILL_COLOR
        for fill in plot_df["fill"]
    ]
    ax.bar(
        x=plot_df["x0"],
        height=plot_df["y1"] - plot_df["y0"],
        width=plot_df["x1"] - plot_df["x0"],
        bottom=plot_df["y0"],
        align="edge",
        color=colors,
        linewidth=0,
    )

    if options.show_label:
        for row in plot_df.itertuples():
            ax.text(
                row.label_x,
                row.label_y,
                row.label,
                ha="center",
                va="center",
                fontsize=8,
                bbox=LABEL_BOX,
            )

    if options.show_legend and categories:
        handles = [
            Patch(facecolor=palette[category], label=category)
            for category in categories
        ]
        ax.legend(
            handles=handles,
            title=options.color_column,
            loc="center left",
            bbox_to_anchor=(1.0, 0.5),
            frameon=False,
        )


def _palette(categories: list[str]) -> dict[str, Any]:
    """Discrete viridis colors, one per category."""
    if not categories:
        return {}
    colormap = matplotlib.colormaps["viridis"].resampled(len(categories))
    return {category: colormap(i) for i, category in enumerate(categories)}


def _configure_by_day_axes(ax: Axes, plot_df: pd.DataFrame) -> None:
    ax.set_xlim(0, 24)
    ax.xaxis.set_major_locator(FixedLocator(BY_DAY_MAJOR_HOURS))
    ax.set_xticklabels([f"{hour:02d}:00" for hour in BY_DAY_MAJOR_HOURS])
    ax.xaxis.set_minor_locator(MultipleLocator(1))

    ax.yaxis_date()
    ax.yaxis.set_major_locator(mdates.DayLocator())
    ax.yaxis.set_major_formatter(mdates.DateFormatter("%Y-%m-%d"))
    if not plot_df.empty:
        ax.set_ylim(plot_df["y0"].min(), plot_df["y1"].max())

    ax.grid(which="major", linewidth=0.8)
    ax.grid(which="minor", linewidth=0.3)
    ax.set_axisbelow(True)
    ax.margins(0)


def _configure_timeline_axes(ax: Axes, timezone: str) -> None:
    ax.xaxis_date(tz=timezone)
    locator = mdates.AutoDateLocator(tz=timezone)
    ax.xaxis.set_major_locator(locator)
    ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator, tz=timezone))
    ax.set_ylim(0, 1)
    ax.get_yaxis().set_visible(False)
    for spine in ("top", "right", "left"):
        ax.spines[spine].set_visible(False)
    ax.set_xlabel("Time")


def _save_atomically(fig: Figure, output_path: Path, image_format: str) -> None:
    try:
        with tempfile.NamedTemporaryFile(
            dir=output_path.parent,
            prefix=f".{output_path.name}.",
            suffix=output_path.suffix,
            delete=False,
        ) as tmp_file:
            tmp_path = Path(tmp_file.name)
    except OSError as e:
        raise RenderError(f"Cannot write '{output_path}': {e}") from e

    try:
        fig.savefig(tmp_path, format=image_format)
        os.chmod(tmp_path, _output_mode(output_path))
        os.replace(tmp_path, output_path)
    except (OSError, ValueError, RuntimeError) as e:
        raise RenderError(f"Cannot write '{output_path}': {e}") from e
    finally:
        # Gone once moved into place
        tmp_path.unlink(missing_ok=True)


def _output_mode(output_path: Path) -> int:
    """Mode of the file being replaced, or the umask default for a new file."""
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
