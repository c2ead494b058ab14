from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional

from pydantic import BaseModel, Field

class EmailMessage(BaseModel):
    """Outbound transactional email."""
    to: List[str] = Field(..., description="Recipient addresses")
    subject: str = Field(..., description="Subject line")
    html: str = Field(..., description="Rendered HTML body")
    sender: Optional[str] = Field(None, description="From address; connector default when omitted")

class EmailConnector(ABC):
    """Abstract Base Class for transactional email providers."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    @abstractmethod
    async def send(self, message: EmailMessage) -> Dict[str, Any]:
        """Sends a message, returning the provider's response (at least an ``id``)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Releases the underlying HTTP resources."""
        pass
