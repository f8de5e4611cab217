from __future__ import annotations

from typing import Optional

from .auth import AuthorizationResult
from .message import SubscribeMessage


class SubscribeMessageBuilder:
    """ Produce the outgoing subscribe message for a channel. The builder
        has no side effects; the same inputs always yield an equal message.

        The 'data' keys are always emitted in the order channel, auth,
        channel_data. Some consumers validate message shape positionally,
        so the order is part of the wire format.
    """

    def build(self, channel: str, authorization: Optional[AuthorizationResult] = None) -> SubscribeMessage:

        if authorization is None:
            return SubscribeMessage(channel)

        return SubscribeMessage(channel, authorization.auth, authorization.channel_data)


_builder = SubscribeMessageBuilder()
build = _builder.build


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
