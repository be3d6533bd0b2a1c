# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/21 22:51:37
# @Author : plainini developers

from errno import ENOENT


class IniError(Exception):
    """Base class of every error raised by this package."""
    pass


class SourceNotFound(IniError, FileNotFoundError):
    """The INI file to load does not exist."""
    def __init__(self, filename: str) -> None:
        # sets errno, strerror and filename like a builtin OSError.
        super().__init__(ENOENT, 'no such file or directory', filename)


class MalformedInput(IniError, ValueError):
    """To record the first ill-formed line met when parsing."""
    def __init__(self, reason: str, line: str, lineno: int) -> None:
        super().__init__(f'line {lineno}: {reason}: {line!r}')
        self.reason = reason
        self.line = line
        self.lineno = lineno


class NotFound(IniError, KeyError):
    def __init__(self, section: str, key: str | None = None) -> None:
        self.section = section
        self.key = key
        super().__init__(
            f'[{section}]' if key is None else f'[{section}] {key}')

    # KeyError.__str__ would repr() the message.
    def __str__(self) -> str:
        return (
            'This entity does not exist in the ini data: '
            + str(self.args[0]))
