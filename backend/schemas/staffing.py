"""
Staffing schemas for employee profiles, projects and allocations.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class EmployeeProfileCreate(BaseModel):
    """Schema for creating an employee profile."""

    user_id: int = Field(..., description="Owning user")
    type: str = Field(..., description="Delivery role")
    geo: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    years_of_experience: int = Field(default=0, ge=0)
    industry: Optional[str] = None
    availability_flag: bool = False
    date_of_joining: Optional[date] = None
    end_date: Optional[date] = None
    notice_date: Optional[date] = None


class EmployeeProfileUpdate(BaseModel):
    """Schema for a partial profile update; unset fields are left alone."""

    type: Optional[str] = None
    geo: Optional[str] = None
    skills: Optional[list[str]] = None
    years_of_experience: Optional[int] = Field(default=None, ge=0)
    industry: Optional[str] = None
    availability_flag: Optional[bool] = None
    date_of_joining: Optional[date] = None
    end_date: Optional[date] = None
    notice_date: Optional[date] = None

    @field_validator("type", "years_of_experience", "availability_flag")
    @classmethod
    def reject_null(cls, v, info):
        """Omit a field to leave it unchanged; null is not a value for these columns."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    seats_by_type: dict[str, int] = Field(default_factory=dict)
    start_date: date
    end_date: date
    status: str = "Open"
    client_name: Optional[str] = None
    industry: Optional[str] = None
    geo_preference: Optional[str] = None
    priority: Optional[str] = None
    budget: Optional[float] = None


class ProjectUpdate(BaseModel):
    """Schema for a partial project update."""

    name: Optional[str] = None
    description: Optional[str] = None
    seats_by_type: Optional[dict[str, int]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[str] = None
    client_name: Optional[str] = None
    industry: Optional[str] = None
    geo_preference: Optional[str] = None
    priority: Optional[str] = None
    budget: Optional[float] = None

    @field_validator("name", "start_date", "end_date", "status")
    @classmethod
    def reject_null(cls, v, info):
        """Omit a field to leave it unchanged; null is not a value for these columns."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class AllocationCreate(BaseModel):
    """Schema for allocating an employee to a project."""

    employee_id: int
    allocation_type: str = "Billable"
    start_date: date
    end_date: Optional[date] = None
