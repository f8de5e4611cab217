""" Python implementation of the authenticated-channel subscription layer of
    a publish/subscribe client. This includes turning an authorizer response
    into a subscribe message, enforcing the naming rules for each channel
    kind, gating client events, and managing the lifetime of the decryption
    key for end-to-end encrypted channels.
"""

# Utility components.

from . import json
from . import config
from . import errors
from . import listeners
from . import states

# Submodules used by multiple other components.

from . import kinds
from . import names
from . import protocol
from . import crypto
from . import keys
from . import trigger
from . import dispatch
from . import authorize

# Primary public-facing interfaces.

from .authorize import Authorizer, AuthorizationWorker
from .channel import Channel
from .connection import Connection
from .dispatch import Dispatcher
from .states import ChannelState, ConnectionState

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
