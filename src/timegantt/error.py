# SPDX-License-Identifier: MIT


class GanttError(Exception):
    """Base class for every fatal error of the drawing pipeline."""


class InputReadError(GanttError):
    pass


class SchemaError(GanttError):
    pass


class InvalidIntervalError(GanttError):
    pass


class UnsupportedOutputError(GanttError):
    pass


class RenderError(GanttError):
    pass
