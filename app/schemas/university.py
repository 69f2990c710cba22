"""
Pydantic schemas for catalog endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


class CourseResponse(BaseModel):
    """Schema for a course nested under its university."""
    id: int
    university_id: int
    name: str
    level: str = Field(..., description="Bachelor's or Master's")
    overview: Optional[str] = None
    duration: Optional[str] = None
    start_admission: Optional[str] = None
    application_deadline: Optional[str] = None
    program_structure: Optional[str] = None
    academic_requirements: Optional[str] = None
    tuition_fee: Optional[int] = None
    scholarship_info: Optional[str] = None
    visa_info: Optional[str] = None

    class Config:
        from_attributes = True


class UniversityResponse(BaseModel):
    """Schema for a university with nested courses and derived course counts."""
    id: int
    name: str
    location: Optional[str] = None
    country: Optional[str] = None
    tuition_fee: Optional[int] = None
    acceptance_rate: Optional[int] = None
    scholarship_available: bool = False
    minimum_gpa: Optional[float] = None
    education_gap: Optional[int] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    courses: List[CourseResponse] = Field(default_factory=list)
    bachelors_count: int = 0
    masters_count: int = 0

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "University of Toronto",
                "location": "Toronto",
                "country": "Canada",
                "tuition_fee": 45000,
                "acceptance_rate": 43,
                "scholarship_available": True,
                "minimum_gpa": 3.0,
                "education_gap": 2,
                "description": "Public research university.",
                "image_url": "https://example.com/uoft.jpg",
                "courses": [],
                "bachelors_count": 0,
                "masters_count": 0
            }
        }


class UniversityListResponse(BaseModel):
    universities: List[UniversityResponse] = Field(..., description="Universities matching search and filters")
    total: int = Field(..., description="Number of matching universities")
