# SPDX-License-Identifier: MIT


class Column:
    START = "timew_interval_start"
    END = "timew_interval_end"
    DESCRIPTION = "task_description"
    PROJECT = "task_project"
    STATUS = "task_status"
    TAGS = "task_tags"
    UUID = "task_uuid"


REQUIRED_COLUMNS = [Column.START, Column.END]

OPTIONAL_COLUMNS = [
    Column.DESCRIPTION,
    Column.PROJECT,
    Column.STATUS,
    Column.TAGS,
    Column.UUID,
]

UNKNOWN_VALUE = "unknown"
