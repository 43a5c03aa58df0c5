# (c) Nelen & Schuurmans

from .debounce import *  # NOQA
from .filter_state import *  # NOQA
from .pagination_cache import *  # NOQA
from .sync_controller import *  # NOQA
