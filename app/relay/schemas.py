"""
Request/response schemas for the notification relay.
"""
from typing import List, Optional, Union
from pydantic import BaseModel, Field

REQUIRED_FIELDS = ("userId", "fullName", "email", "course", "university", "applicationId")


class DocumentEntry(BaseModel):
    document_type: str
    file_path: str


class SendEmailRequest(BaseModel):
    """Application-submitted event. Presence of required fields is checked by the route."""
    userId: Optional[Union[int, str]] = None
    fullName: Optional[str] = None
    email: Optional[str] = None
    course: Optional[str] = None
    university: Optional[str] = None
    applicationId: Optional[Union[int, str]] = None
    documents: Optional[List[DocumentEntry]] = Field(default_factory=list)

    def missing_fields(self) -> List[str]:
        # 0, "" and null all count as missing
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    class Config:
        coerce_numbers_to_str = True
        json_schema_extra = {
            "example": {
                "userId": 7,
                "fullName": "Jane Doe",
                "email": "jane.doe@example.com",
                "course": "MSc Computer Science",
                "university": "University of Toronto",
                "applicationId": 42,
                "documents": [{"document_type": "cv", "file_path": "7/42/1700000000000_cv"}]
            }
        }
