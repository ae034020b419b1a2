"""
Port (interface) for ownership/forensic record collaborators.
The payload returned is untrusted: it is validated by the application layer
(src.application.services.forensic_payload), never consumed directly.
"""

from abc import ABC, abstractmethod
from typing import Any


class IOwnershipSource(ABC):
    @abstractmethod
    async def fetch_forensic_payload(self, entity: str) -> Any:
        """Return a ForensicRecord-shaped JSON value for *entity*.

        Raises:
            OwnershipSourceError: if the collaborator cannot produce a payload.
        """
        ...
