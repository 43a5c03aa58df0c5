# -*- coding: utf-8 -*-
# (c) Nelen & Schuurmans

from .base.application import *  # NOQA
from .base.domain import *  # NOQA
from .base.infrastructure import *  # NOQA
from .config import ClientConfig  # NOQA
from .presentation import *  # NOQA

# fmt: off
__version__ = '0.1.0.dev0'
# fmt: on
