"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

SUBSCRIBE = "pusher:subscribe"
UNSUBSCRIBE = "pusher:unsubscribe"
SUBSCRIPTION_ERROR = "pusher:subscription_error"
SUBSCRIPTION_SUCCEEDED = "pusher_internal:subscription_succeeded"

CLIENT_PREFIX = "client-"
PUSHER_PREFIX = "pusher:"
INTERNAL_PREFIX = "pusher_internal:"

# Fields of the subscribe message 'data' mapping, in wire order.
CHANNEL = "channel"
AUTH = "auth"
CHANNEL_DATA = "channel_data"

# Fields of an authorization response.
SHARED_SECRET = "shared_secret"

# Fields of an encrypted event envelope.
NONCE = "nonce"
CIPHERTEXT = "ciphertext"
