"""
Pydantic schemas for the admin CSV import.
"""
from typing import List
from pydantic import BaseModel, Field


class RowError(BaseModel):
    row: int = Field(..., description="1-based data row number (header excluded)")
    errors: List[str]


class ImportResponse(BaseModel):
    message: str
    inserted: int = Field(..., description="Rows inserted")
    rejected: int = Field(0, description="Rows rejected by strict validation")
    errors: List[RowError] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Successfully uploaded 12 universities",
                "inserted": 12,
                "rejected": 0,
                "errors": []
            }
        }
