"""
Generic response schemas
"""

from pydantic import BaseModel
from typing import Any, Optional, Dict


class ErrorResponse(BaseModel):
    """Body of every failed request"""
    success: bool = False
    error: str
    code: str
    details: Optional[Dict[str, Any]] = None
