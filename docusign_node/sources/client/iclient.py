from abc import ABC, abstractmethod
from typing import Any


class IClient(ABC):
    """Interface implemented by every source client"""

    @abstractmethod
    def get_client(self) -> Any:
        """Return the underlying client used to talk to the service"""
