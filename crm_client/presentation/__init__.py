# (c) Nelen & Schuurmans

from .forms import *  # NOQA
from .views import *  # NOQA
