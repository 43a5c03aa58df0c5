from .api_gateway import *  # NOQA
from .api_provider import *  # NOQA
from .auth_gateway import *  # NOQA
from .crm_gateways import *  # NOQA
from .exceptions import *  # NOQA
from .response import *  # NOQA
