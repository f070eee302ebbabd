from pydantic import BaseModel, Field, StrictBool, StrictStr
from typing import Any, Dict, List, Optional

class StreamSpec(BaseModel):
    """Description of a new stream to create on the server"""
    title: str
    description: str
    fields: List[str]  # Column order on the server follows this order
    hidden: bool = False
    alias: Optional[str] = None
    tags: Optional[List[str]] = None

    def to_payload(self) -> Dict[str, Any]:
        """Render into the JSON object the /streams endpoint expects"""
        payload: Dict[str, Any] = {
            'title': self.title,
            'description': self.description,
            'fields': ','.join(self.fields),
            'hidden': 1 if self.hidden else 0,
        }
        if self.alias is not None:
            payload['alias'] = self.alias
        if self.tags:
            payload['tags'] = ','.join(self.tags)
        return payload

class StreamResultDTO(BaseModel):
    """Outcome flag shared by every create-stream response"""
    success: StrictBool

class StreamCreatedDTO(StreamResultDTO):
    """Keys issued by the server for a freshly created stream"""
    public_key: StrictStr = Field(..., alias='publicKey')
    private_key: StrictStr = Field(..., alias='privateKey')
    delete_key: StrictStr = Field(..., alias='deleteKey')

class StreamRejectedDTO(StreamResultDTO):
    """Failure report from the server, e.g. when the alias is taken"""
    message: StrictStr
