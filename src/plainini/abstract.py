# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/10/21 22:31:48
# @Author : plainini developers

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Binds a document type to one file on disk.

    Models never touch files themselves. Reading and writing is the
    handler's job, and a handler is used for exactly one file name.
    """
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
