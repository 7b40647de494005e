# SPDX-License-Identifier: MIT

from typing import NamedTuple

import pendulum


class Interval(NamedTuple):
    start: pendulum.DateTime
    end: pendulum.DateTime
    description: str
    project: str
    status: str
    tags: str
    uuid: str
