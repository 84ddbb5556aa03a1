from pydantic import BaseModel
from typing import Optional, Dict, Any


class ErrorResponse(BaseModel):
    # The editor reads `error` as a plain message string.
    error: str
    code: str
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    request_id: Optional[str] = None
