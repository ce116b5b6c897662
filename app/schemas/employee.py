"""
Employee Schemas for request/response validation
"""
from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import fix_datetime_timezone


class EmployeeBase(BaseModel):
    em_full_name: str = Field(..., min_length=1)
    em_role: str = Field(..., min_length=1)
    em_franchise: Optional[str] = None
    em_area: Optional[str] = "LDN"
    em_spvr: Optional[str] = None
    em_address: Optional[str] = None
    em_latitude: Optional[float] = Field(None, ge=-90, le=90)
    em_longitude: Optional[float] = Field(None, ge=-180, le=180)
    em_radius_meters: Optional[int] = Field(200, gt=0)
    em_status: Literal["Active", "Deactive"] = "Active"
    em_photo_url: Optional[str] = None
    em_qr_code: Optional[str] = None


class EmployeeCreate(EmployeeBase):
    em_employee_id: str = Field(..., min_length=1, max_length=50)

    @field_validator("em_employee_id")
    @classmethod
    def strip_employee_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("em_employee_id must not be blank")
        return v


class EmployeeUpdate(BaseModel):
    # Carried only so a client can echo it back; changing it is rejected
    em_employee_id: Optional[str] = None
    em_full_name: Optional[str] = Field(None, min_length=1)
    em_role: Optional[str] = Field(None, min_length=1)
    em_franchise: Optional[str] = None
    em_area: Optional[str] = None
    em_spvr: Optional[str] = None
    em_address: Optional[str] = None
    em_latitude: Optional[float] = Field(None, ge=-90, le=90)
    em_longitude: Optional[float] = Field(None, ge=-180, le=180)
    em_radius_meters: Optional[int] = Field(None, gt=0)
    em_status: Optional[Literal["Active", "Deactive"]] = None
    em_photo_url: Optional[str] = None
    em_qr_code: Optional[str] = None

    @field_validator("em_full_name", "em_role", "em_status")
    @classmethod
    def reject_null(cls, v):
        # Omit the field to keep the stored value; these columns are NOT NULL
        if v is None:
            raise ValueError("must not be null")
        return v


class EmployeeInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    em_id: int
    em_employee_id: str
    em_full_name: str
    em_role: str
    em_franchise: Optional[str] = None
    em_area: Optional[str] = None
    em_spvr: Optional[str] = None
    em_address: Optional[str] = None
    em_latitude: Optional[float] = None
    em_longitude: Optional[float] = None
    em_radius_meters: Optional[int] = None
    em_status: str
    em_photo_url: Optional[str] = None
    em_qr_code: Optional[str] = None
    em_created_by: Optional[int] = None
    em_created_at: Optional[datetime] = None
    em_updated_at: Optional[datetime] = None

    @field_validator('em_created_at', 'em_updated_at', mode='before')
    @classmethod
    def fix_timezone(cls, v):
        return fix_datetime_timezone(v)


class Employee(EmployeeInDB):
    pass


class EmployeePublic(BaseModel):
    """Denormalized employee snapshot shown by scanner apps after a scan"""
    model_config = ConfigDict(from_attributes=True)

    em_id: int
    em_employee_id: str
    em_full_name: str
    em_role: str
    em_franchise: Optional[str] = None
    em_area: Optional[str] = None
    em_spvr: Optional[str] = None
    em_photo_url: Optional[str] = None


class EmployeeLocated(EmployeePublic):
    """Public snapshot plus base coordinates, used by map views"""
    em_latitude: Optional[float] = None
    em_longitude: Optional[float] = None


class EmployeeStats(BaseModel):
    total: int
    active: int
    inactive: int
    withGPS: int
