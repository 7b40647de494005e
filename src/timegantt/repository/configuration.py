# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from timegantt import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if configuration.APP_CONFIG_PATH.is_file():
            self._config = load(
                configuration.APP_CONFIG_PATH.read_text(), Loader=Loader
            )
        if self._config is None:
            self._config = configuration.get_default_configuration()
            self.is_dirty = True
            return

        # Fill in settings missing from older or hand-written files
        for key, value in configuration.get_default_configuration().items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]
                self.is_dirty = True

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        timezone: Optional[str] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        color_column: Optional[str] = None,
        remove_color_column: bool = False,
        show_legend: Optional[bool] = None,
        show_label: Optional[bool] = None,
    ) -> None:
        self.is_dirty = True

        if timezone is not None:
            self.config["timezone"] = timezone
        if width is not None:
            self.config["width"] = width
        if height is not None:
            self.config["height"] = height
        if color_column is not None:
            self.config["color_column"] = color_column
        if remove_color_column:
            self.config["color_column"] = None
        if show_legend is not None:
            self.config["show_legend"] = show_legend
        if show_label is not None:
            self.config["show_label"] = show_label


CONFIGURATION_REPO = ConfigurationRepository()
