"""Infrastructure providers."""

# Import bases
from .api import ApiProvider
from .session import SessionProvider

# Import implementations (needed for __subclasses__())
from .api import ProdApiProvider  # noqa: F401
from .session import ProdSessionProvider  # noqa: F401

__all__ = [
    "ApiProvider",
    "ProdApiProvider",
    "ProdSessionProvider",
    "SessionProvider",
]
