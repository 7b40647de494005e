# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

import platformdirs

APP_NAME = "timegantt"

CONFIG_PATH: Path = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH: Path = CONFIG_PATH / "config.yaml"


class Configuration(TypedDict):
    timezone: str
    width: float
    height: float
    color_column: Optional[str]
    show_legend: bool
    show_label: bool


def get_default_configuration() -> Configuration:
    return {
        "timezone": "Europe/Paris",
        "width": 16.0,
        "height": 9.0,
        "color_column": "task_project",
        "show_legend": True,
        "show_label": True,
    }
