"""
Statement Models

A statement is one piece of SQL text tagged with the client that executes it.
One script (one file) maps to one client.
"""

from typing import Dict, Any, Iterable, List

from pydantic import BaseModel, ConfigDict, Field


class Statement(BaseModel):
    """One SQL statement owned by one client."""

    model_config = ConfigDict(frozen=True)

    client_id: int = Field(..., ge=0, description="Client which executes the statement")
    text: str = Field(..., description="SQL text, sent to the database as-is")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"client_id": self.client_id, "text": self.text}


def build_script(client_id: int, texts: Iterable[str]) -> List[Statement]:
    """Tag parsed statement texts with the client id of their script."""
    return [Statement(client_id=client_id, text=text) for text in texts]
