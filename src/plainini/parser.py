# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/21 23:34:56
# @Author : plainini developers

"""Text <-> `IniDocument` conversion, plus the file glue around it.

We do parsing based on the following consumption:
1. One statement per line. No continuation lines, no quoting rules,
   values are kept *literally* (`"payroll.dat"` keeps its quotes).
2. `;` starts a comment only at the head of a (trimmed) line.
3. Every entry belongs to a section. There is no header section here.

`IniEngine` itself never touches files. `IniFile` does, and is the only
place in this package that logs.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from re import compile as regex
from warnings import warn

import chardet

from .abstract import FileHandler
from .consts import ASSIGN_OP, COMMENT_CHAR, RESERVED_CHARS, ParseMode
from .errors import MalformedInput, SourceNotFound
from .model import IniDocument

__all__ = ['IniEngine', 'IniFile', 'parse', 'serialize', 'load', 'save']

logger = logging.getLogger(__name__)


class _State(Enum):
    START = 0       # no section header met yet
    IN_SECTION = 1


def _has_reserved(token: str) -> bool:
    return not RESERVED_CHARS.isdisjoint(token)


class IniEngine:
    """Stateless parser/serializer bound to one `ParseMode`.

    The engine keeps no reference to any document once a call returns,
    so one instance may be shared freely.
    """
    # applied to already trimmed lines.
    SECTION_RGX = regex(r'^\[(?P<name>.*)\]$')
    # only CR, LF and CRLF end a line.
    NEWLINE_RGX = regex(r'\r\n?|\n')

    def __init__(self, mode: ParseMode | str = ParseMode.STRICT) -> None:
        self._mode = ParseMode(mode)

    @property
    def mode(self) -> ParseMode:
        return self._mode

    @property
    def strict(self) -> bool:
        return self._mode is ParseMode.STRICT

    def _read_section(self, name: str, line: str, lineno: int) -> str:
        name = name.strip()
        if not name:
            raise MalformedInput('empty section name', line, lineno)
        if _has_reserved(name):
            if self.strict:
                raise MalformedInput(
                    'reserved character in section name', line, lineno)
            warn(f'line {lineno}: reserved character in section [{name}].')
        return name

    def _read_entry(self, line: str, lineno: int) -> tuple[str, str]:
        if ASSIGN_OP not in line:
            raise MalformedInput(f"missing '{ASSIGN_OP}'", line, lineno)
        if self.strict and line.count(ASSIGN_OP) > 1:
            raise MalformedInput(
                f"more than one '{ASSIGN_OP}'", line, lineno)

        key, val = (i.strip() for i in line.split(ASSIGN_OP, 1))
        if not key:
            raise MalformedInput('empty key', line, lineno)
        if not self.strict:
            if _has_reserved(key):
                warn(f'line {lineno}: reserved character in key "{key}".')
            return key, val

        if not val:
            raise MalformedInput('empty value', line, lineno)
        if _has_reserved(key) or _has_reserved(val):
            raise MalformedInput(
                'reserved character in entry', line, lineno)
        return key, val

    def parse(
        self, text: str, into: IniDocument | None = None
    ) -> IniDocument:
        """读取解码好的 INI 文本。

        Args:
            text: the whole INI content.
            into: merge the result into this document instead of a new one.
                Keys already there get overridden (last write wins).

        Raises:
            MalformedInput: on the first ill-formed line. Nothing is
                returned then, and `into` stays untouched.
        """
        sections: dict[str, dict[str, str]] = {}
        state, this_sect = _State.START, {}

        for lineno, raw in enumerate(self.NEWLINE_RGX.split(text), 1):
            line = raw.strip()
            if not line or line.startswith(COMMENT_CHAR):
                continue

            if m := self.SECTION_RGX.match(line):
                name = self._read_section(m['name'], raw, lineno)
                this_sect = sections.setdefault(name, {})
                state = _State.IN_SECTION
                continue

            if state is _State.START:
                raise MalformedInput(
                    'entry outside any section', raw, lineno)
            key, val = self._read_entry(raw, lineno)
            this_sect[key] = val

        if into is None:
            return IniDocument(sections)
        into.update(sections)
        return into

    @staticmethod
    def serialize(
        doc: Mapping[str, Mapping[str, str]], *, blank_lines: int = 1
    ) -> str:
        """Render `doc` as INI text.

        Sections come in the document's own iteration order and are
        separated by `blank_lines` empty lines. Every line ends with `\\n`.
        """
        buffers = []
        for sect, pairs in doc.items():
            ret = f'[{sect}]\n'
            for k, v in pairs.items():
                ret += f'{k} {ASSIGN_OP} {v}\n'
            buffers.append(ret)
        return ('\n' * blank_lines).join(buffers)


_DEFAULT_ENGINE = IniEngine()


def parse(
    text: str, *,
    mode: ParseMode | str = ParseMode.STRICT,
    into: IniDocument | None = None
) -> IniDocument:
    """Parse INI `text`, see `IniEngine.parse()`."""
    if ParseMode(mode) is ParseMode.STRICT:
        return _DEFAULT_ENGINE.parse(text, into)
    return IniEngine(mode).parse(text, into)


def serialize(
    doc: Mapping[str, Mapping[str, str]], *, blank_lines: int = 1
) -> str:
    return IniEngine.serialize(doc, blank_lines=blank_lines)


class IniFile(FileHandler[IniDocument]):
    """Load an `IniDocument` from, or save it to, one file."""
    def __init__(
        self, filename: str, encoding: str | None = None, *,
        mode: ParseMode | str = ParseMode.STRICT
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._engine = IniEngine(mode)

    @staticmethod
    def _decode_bytes(raw: bytes) -> str:
        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            logger.warning(
                'Unsure about encoding (%s, confidence %s), trying utf-8.',
                codec['encoding'], codec['confidence'])
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            return raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            logger.warning('Decoding as %s failed, use latin-1 instead.',
                           codec['encoding'])
            return raw.decode('latin-1')

    def _read_text(self) -> str:
        try:
            with open(self._fn, 'rb') as fp:
                raw = fp.read()
        except FileNotFoundError as e:
            raise SourceNotFound(self._fn) from e

        # when encoding is None, try utf-8 (with or without BOM) first.
        # and when encoding got wrong, fallback to `chardet`.
        codec = self._codec or 'utf-8-sig'
        try:
            return raw.decode(codec)
        except UnicodeDecodeError:
            logger.warning('%s is not %s encoded, detecting with chardet.',
                           self._fn, codec)
            return self._decode_bytes(raw)

    def read(self, into: IniDocument | None = None) -> IniDocument:
        """读取`IniFile`实例指定的文件。

        Raises:
            SourceNotFound: if the file does not exist.
            MalformedInput: if the content does not parse.
        """
        ret = self._engine.parse(self._read_text(), into)
        logger.debug('Read %d sections from %s.', len(ret), self._fn)
        return ret

    def write(
        self, instance: IniDocument, *, blank_lines: int = 1
    ) -> None:
        """保存到*一个* INI 文件，覆盖原有内容。

        Note: comments and original key order are *not* restored.
        """
        text = self._engine.serialize(instance, blank_lines=blank_lines)
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            fp.write(text)
        logger.debug('Wrote %d sections to %s.', len(instance), self._fn)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def load(
    filename: str, encoding: str | None = None, *,
    mode: ParseMode | str = ParseMode.STRICT
) -> IniDocument:
    return IniFile(filename, encoding, mode=mode).read()


def save(
    doc: IniDocument, filename: str, encoding: str | None = None, *,
    blank_lines: int = 1
) -> None:
    IniFile(filename, encoding).write(doc, blank_lines=blank_lines)
