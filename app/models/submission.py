"""Registration submission Pydantic models"""
from pydantic import BaseModel
from typing import Dict, Any


class SubmissionResponse(BaseModel):
    """Successful submission: the created Notion page is echoed back"""
    message: str
    data: Dict[str, Any]


class SubmissionErrorResponse(BaseModel):
    """Failed submission"""
    message: str
    error: str
