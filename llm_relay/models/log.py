"""
Client log data models
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Any


class ClientLogEntry(BaseModel):
    """Log line shipped by the browser client"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    message: Optional[Any] = None
    type: Optional[str] = None
    user_agent: Optional[str] = Field(default=None, alias="userAgent")
    timestamp: Optional[str] = None
