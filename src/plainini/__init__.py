# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/22 00:12:05
# @Author : plainini developers

from .consts import ParseMode, SetPolicy
from .errors import IniError, MalformedInput, NotFound, SourceNotFound
from .model import IniDocument, IniSection
from .parser import IniEngine, IniFile, load, parse, save, serialize

__all__ = [
    'IniDocument', 'IniSection',
    'IniEngine', 'IniFile', 'parse', 'serialize', 'load', 'save',
    'ParseMode', 'SetPolicy',
    'IniError', 'MalformedInput', 'NotFound', 'SourceNotFound'
]
