from pydantic import BaseModel
from typing import Optional


class DeleteRequest(BaseModel):
    reason: Optional[str] = None
