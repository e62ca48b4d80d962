"""Production container."""

from dishka import AsyncContainer, make_async_container

from canopy.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container from environment settings.

    Closing the container tears the comment store down, which flushes pending
    writes, and then releases the storage backend.
    """
    return make_async_container(*(get_provider(base)() for base in PROVIDERS))
