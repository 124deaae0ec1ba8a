#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

import logging
import sys
from collections.abc import Sequence
from typing import Any, Protocol, TypeVar

_VT = TypeVar('_VT')
_T_contra = TypeVar("_T_contra", contravariant=True)
_ST = TypeVar('_ST', bound=Sequence)


class SupportsLT(Protocol[_T_contra]):
    def __lt__(self, __other: _T_contra) -> bool: ...

# symbols only need ordering and equality
_SymT = TypeVar('_SymT', bound=SupportsLT[Any])


logger = logging.Logger('symtrie', 'INFO')
def __init():
    fmt = logging.Formatter('[%(levelname)s] %(filename)s:%(lineno)d: %(message)s', None, '%')
    if not logger.hasHandlers():
        logger.addHandler(logging.StreamHandler(sys.stdout))
    h = None
    for h in logger.handlers:
        h.setFormatter(fmt)
__init()
del __init
