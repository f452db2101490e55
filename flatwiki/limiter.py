from flask_limiter import Limiter
from flask_limiter.util import get_remote_address


def create_limiter(storage_uri=None):
    """
    Build a limiter keyed on the client address. Limits and storage come from
    the RATELIMIT_* keys of the app config unless storage_uri is given.
    """
    kwargs = {}
    if storage_uri:
        kwargs["storage_uri"] = storage_uri
    return Limiter(
        key_func=get_remote_address,
        in_memory_fallback_enabled=True,
        **kwargs,
    )
