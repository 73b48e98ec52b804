# Copyright (C) 2022 Matthew Marting
# SPDX-License-Identifier: GPL-3.0-or-later

import sys

__all__ = [
    "LogicError",
    "error_str",
    "handle",
]


class LogicError(RuntimeError):
    def __init__(self, *args, line_number=None, column=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.line_number = line_number
        self.column = column


def error_str(source_file, line_number, column, message):
    if line_number is None or column is None:
        return f"{source_file}: {message}"
    return f"{source_file}:{line_number + 1}:{column + 1}: {message}"


def handle(e, source_file, file=None):
    if file is None:
        file = sys.stderr
    print(error_str(source_file, e.line_number, e.column, f"error: {e}"), file=file)
