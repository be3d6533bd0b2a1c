# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/21 22:40:12
# @Author : plainini developers

from enum import Enum

COMMENT_CHAR = ';'
ASSIGN_OP = '='

# never allowed in section/key names, nor in values under strict mode.
RESERVED_CHARS = frozenset(';=[]')


class ParseMode(str, Enum):
    STRICT = 'strict'
    LENIENT = 'lenient'  # legacy behaviour, not recommended.


class SetPolicy(str, Enum):
    UPSERT = 'upsert'  # create section/key if absent
    UPDATE = 'update'  # only overwrite keys that already exist
