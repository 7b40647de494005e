# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Any, Callable, Iterator

import pendulum
import pytest

from timegantt import configuration
from timegantt.model.interval import Interval
from timegantt.model.options import GanttOptions
from timegantt.repository.configuration import CONFIGURATION_REPO

CSV_HEADER = (
    "timew_interval_start,timew_interval_end,task_description,"
    "task_project,task_status,task_tags,task_uuid"
)


@pytest.fixture(autouse=True)
def config_dir(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    path = tmp_path_factory.mktemp("config")
    monkeypatch.setattr(configuration, "CONFIG_PATH", path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", path / "config.yaml")
    CONFIGURATION_REPO.reset()
    yield path
    CONFIGURATION_REPO.reset()


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    def _write_csv(
        *rows: str, header: str = CSV_HEADER, name: str = "input.csv"
    ) -> Path:
        path = tmp_path / name
        path.write_text("\n".join([header, *rows]) + "\n")
        return path

    return _write_csv


def make_interval(
    start: pendulum.DateTime,
    end: pendulum.DateTime,
    description: str = "write report",
) -> Interval:
    return Interval(
        start=start,
        end=end,
        description=description,
        project="work",
        status="pending",
        tags="writing",
        uuid="3f0c8f5e",
    )


def make_options(**overrides: Any) -> GanttOptions:
    values: dict[str, Any] = {
        "input_path": None,
        "output_path": None,
        "width": 16.0,
        "height": 9.0,
        "color_column": "task_project",
        "timezone": "UTC",
        "show_legend": True,
        "show_label": True,
        "by_day": False,
    }
    values.update(overrides)
    return GanttOptions(**values)
