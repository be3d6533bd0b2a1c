# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/21 23:05:19
# @Author : plainini developers

"""
Basically plain INI structure: sections of `key = value` pairs.

No inheritance, no `[#include]`, no ordering guarantee.
As for reading and writing text, just see `plainini.parser`.
"""

from collections.abc import Mapping, MutableMapping
from typing import Iterator

from .consts import SetPolicy
from .errors import NotFound


class IniSection(MutableMapping[str, str]):
    """INI 小节字典。

    A live view onto one section of an `IniDocument`: writes through the
    view land in the document itself. Use `to_dict()` for a detached copy.

    All pairs *should* be `str: str` (empty string allowed),
    however in runtime we wouldn't limit that much.
    """
    def __init__(self, section_name: str, this_dict: dict[str, str]) -> None:
        self._name = section_name
        # shared ptr to item of IniDocument.__raw_dicts
        self._data = this_dict

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        try:
            return self._data[key]
        except KeyError:
            raise NotFound(self._name, key) from None

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        try:
            del self._data[key]
        except KeyError:
            raise NotFound(self._name, key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def to_dict(self) -> dict[str, str]:
        return self._data.copy()


class IniDocument(MutableMapping[str, IniSection]):
    """INI 文件表示。Supports the following form (comments dropped):

        ```ini
        ; comment line
        [section]
        key = value
        ```

    Two documents compare equal when they hold the same sections, keys and
    values, in whatever order. A plain `dict[str, dict[str, str]]` of the
    same content compares equal as well.

    Note: the document holds no lock. Guard it yourself if it is shared
    among threads.
    """
    def __init__(
        self,
        sections: Mapping[str, Mapping[str, str]] | None = None
    ) -> None:
        self.__raw_dicts: dict[str, dict[str, str]] = {}
        if sections:
            self.update(sections)

    def __getitem__(self, key: str) -> IniSection:
        if key not in self.__raw_dicts:
            raise NotFound(key)
        return IniSection(key, self.__raw_dicts[key])

    def __setitem__(self, key: str, value: Mapping[str, str]) -> None:
        # shouldn't keep ptr to external dict in key setting operation.
        self.__raw_dicts[key] = dict(value.items())

    def __delitem__(self, key: str) -> None:
        if key not in self.__raw_dicts:
            raise NotFound(key)
        del self.__raw_dicts[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw_dicts

    def __len__(self) -> int:
        return len(self.__raw_dicts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw_dicts)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.__raw_dicts!r})'

    def __str__(self) -> str:
        return self.serialize()

    def setdefault(  # type: ignore[override]
        self, key: str, default: Mapping[str, str] | None = None
    ) -> IniSection:
        """If `key` not in self, add it (empty, or a copy of `default`)."""
        if key not in self.__raw_dicts:
            self[key] = default or {}
        return self[key]

    def update(  # type: ignore[override]
        self, other: Mapping[str, Mapping[str, str]] | None = None, /
    ) -> None:
        """To merge `other` into self, section by section.

        Unlike `dict.update()`, an existing section is *extended*
        rather than replaced; keys in `other` win.
        """
        if other is None:
            return
        for name, pairs in other.items():
            self.__raw_dicts.setdefault(name, {}).update(pairs.items())

    def rename(self, old: str, new: str) -> bool:
        """Rename a section.

        Returns:
            `True` if succeed, otherwise `False`.
            May not success if `old` is not found or `new` already exists.
        """
        if old not in self.__raw_dicts or new in self.__raw_dicts:
            return False
        self.__raw_dicts[new] = self.__raw_dicts.pop(old)
        return True

    def copy(self) -> 'IniDocument':
        return type(self)(self.__raw_dicts)

    def list_section_names(self) -> list[str]:
        return list(self.__raw_dicts)

    def list_sections(self) -> dict[str, dict[str, str]]:
        """Snapshot of the whole document.

        The returned dicts are copies, mutating them never affects self.
        """
        return {k: v.copy() for k, v in self.__raw_dicts.items()}

    def get_value(self, section: str, key: str) -> str:
        if section not in self.__raw_dicts:
            raise NotFound(section, key)
        return self[section][key]

    def set_value(
        self, section: str, key: str, value: str, *,
        policy: SetPolicy | str = SetPolicy.UPSERT
    ) -> None:
        """Assign `value` to `key` of `section`.

        With `SetPolicy.UPSERT` the section and key are created when absent.
        With `SetPolicy.UPDATE` only an existing key may be overwritten,
        otherwise `NotFound` is raised and nothing changes.
        """
        if SetPolicy(policy) is SetPolicy.UPDATE:
            if key not in self.__raw_dicts.get(section, {}):
                raise NotFound(section, key)
        self.__raw_dicts.setdefault(section, {})[key] = value

    def serialize(self, *, blank_lines: int = 1) -> str:
        # parser imports this module.
        from .parser import serialize
        return serialize(self, blank_lines=blank_lines)
