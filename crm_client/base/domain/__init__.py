# (c) Nelen & Schuurmans

from .activity import *  # NOQA
from .contact import *  # NOQA
from .exceptions import *  # NOQA
from .filter import *  # NOQA
from .gateway import *  # NOQA
from .load_state import *  # NOQA
from .pagination import *  # NOQA
from .repository import *  # NOQA
from .root_entity import *  # NOQA
from .session import *  # NOQA
from .types import *  # NOQA
from .value_object import *  # NOQA
