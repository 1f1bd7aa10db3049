"""Current-user provider interface."""

from abc import ABC, abstractmethod

from engage.domain.model.user import UserRef


class CurrentUserProvider(ABC):
    """Supplies the signed-in user.

    Used for ownership checks and for synthesizing optimistic reaction
    records. Authentication itself happens elsewhere.
    """

    @abstractmethod
    def current_user(self) -> UserRef | None:
        """Return the signed-in user, or None when signed out."""
        pass
