# SPDX-License-Identifier: MIT

import os
import stat
import sys
from pathlib import Path
from typing import Any, Callable, Iterator

import pandas as pd
import pytest
from matplotlib.figure import Figure

from conftest import make_options
from timegantt.error import RenderError, UnsupportedOutputError
from timegantt.service.loader import load_table
from timegantt.service.split import split_table
from timegantt.view.assemble import assemble
from timegantt.view.render import check_output_path, render

ROWS = (
    "2024-01-01T09:00:00Z,2024-01-01T12:00:00Z,write,thesis,pending,,a1",
    "2024-01-01T22:00:00Z,2024-01-03T05:00:00Z,deploy,ops,done,,b2",
    "2024-01-03T13:00:00Z,2024-01-03T14:00:00Z,review,thesis,done,,c3",
)


@pytest.fixture
def table(write_csv: Callable[..., Path]) -> pd.DataFrame:
    return load_table(write_csv(*ROWS), "UTC")


def test_render_timeline_png(table: pd.DataFrame, tmp_path: Path) -> None:
    output = tmp_path / "chart.png"
    options = make_options(output_path=output, width=8.0, height=4.5)

    render(assemble(table, options), options)

    assert output.read_bytes().startswith(b"\x89PNG")


def test_render_by_day_svg(table: pd.DataFrame, tmp_path: Path) -> None:
    output = tmp_path / "chart.svg"
    options = make_options(output_path=output, by_day=True)

    render(assemble(split_table(table, "UTC"), options), options)

    assert "<svg" in output.read_text()


def test_render_without_legend_label_or_color(
    table: pd.DataFrame, tmp_path: Path
) -> None:
    output = tmp_path / "chart.pdf"
    options = make_options(
        output_path=output, show_legend=False, show_label=False, color_column=None
    )

    render(assemble(table, options), options)

    assert output.read_bytes().startswith(b"%PDF")


def test_render_empty_chart(write_csv: Callable[..., Path], tmp_path: Path) -> None:
    output = tmp_path / "empty.png"
    options = make_options(output_path=output, by_day=True)

    render(assemble(load_table(write_csv(), "UTC"), options), options)

    assert output.exists()


def test_render_replaces_existing_file(table: pd.DataFrame, tmp_path: Path) -> None:
    output = tmp_path / "chart.png"
    output.write_text("old")
    options = make_options(output_path=output)

    render(assemble(table, options), options)

    assert output.read_bytes().startswith(b"\x89PNG")
    assert [path.name for path in tmp_path.iterdir() if path.suffix == ".png"] == [
        "chart.png"
    ]


@pytest.mark.parametrize("output_path", [None, Path("-")])
def test_stdout_output_is_refused(output_path: Any) -> None:
    with pytest.raises(UnsupportedOutputError, match="stdout"):
        check_output_path(output_path)


@pytest.mark.parametrize("name", ["chart.txt", "chart"])
def test_unsupported_image_format(tmp_path: Path, name: str) -> None:
    with pytest.raises(RenderError, match="unsupported image format"):
        check_output_path(tmp_path / name)


def test_check_output_path_returns_format(tmp_path: Path) -> None:
    assert check_output_path(tmp_path / "chart.PNG") == "png"


def test_failed_write_leaves_no_file(
    table: pd.DataFrame, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    output_dir = tmp_path / "out"
    output_dir.mkdir()
    options = make_options(output_path=output_dir / "chart.png")

    def fail_savefig(self: Figure, *args: Any, **kwargs: Any) -> None:
        raise OSError("No space left on device")

    monkeypatch.setattr(Figure, "savefig", fail_savefig)

    with pytest.raises(RenderError, match="No space left"):
        render(assemble(table, options), options)

    assert list(output_dir.iterdir()) == []


def test_missing_output_directory(table: pd.DataFrame, tmp_path: Path) -> None:
    options = make_options(output_path=tmp_path / "missing" / "chart.png")

    with pytest.raises(RenderError):
        render(assemble(table, options), options)


@pytest.fixture
def umask() -> Iterator[int]:
    previous = os.umask(0o022)
    yield 0o022
    os.umask(previous)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX file modes")
def test_new_image_respects_umask(
    table: pd.DataFrame, tmp_path: Path, umask: int
) -> None:
    output = tmp_path / "chart.png"
    options = make_options(output_path=output)

    render(assemble(table, options), options)

    assert stat.S_IMODE(output.stat().st_mode) == 0o666 & ~umask


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX file modes")
def test_replaced_image_keeps_its_mode(
    table: pd.DataFrame, tmp_path: Path, umask: int
) -> None:
    output = tmp_path / "chart.png"
    output.write_text("old")
    output.chmod(0o640)
    options = make_options(output_path=output)

    render(assemble(table, options), options)

    assert stat.S_IMODE(output.stat().st_mode) == 0o640


def test_backend_error_becomes_render_error(
    table: pd.DataFrame, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    options = make_options(output_path=tmp_path / "chart.png")

    def fail_savefig(self: Figure, *args: Any, **kwargs: Any) -> None:
        raise RuntimeError("backend failure")

    monkeypatch.setattr(Figure, "savefig", fail_savefig)

    with pytest.raises(RenderError, match="backend failure"):
        render(assemble(table, options), options)

    assert list(tmp_path.glob(".chart.png.*")) == []
    assert not (tmp_path / "chart.png").exists()


def test_unexpected_error_leaves_no_temporary_file(
    table: pd.DataFrame, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    options = make_options(output_path=tmp_path / "chart.png")

    def fail_savefig(self: Figure, *args: Any, **kwargs: Any) -> None:
        raise KeyError("dpi")

    monkeypatch.setattr(Figure, "savefig", fail_savefig)

    with pytest.raises(KeyError):
        render(assemble(table, options), options)

    assert list(tmp_path.glob(".chart.png.*")) == []
