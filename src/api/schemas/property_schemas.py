from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, HttpUrl


class OwnerResponse(BaseModel):
    id_owner: str
    name: str
    address: str
    photo: str
    birthday: date | None = None
    created_at: datetime
    updated_at: datetime


class PropertyImageResponse(BaseModel):
    id_property_image: str
    id_property: str
    file: str
    enabled: bool
    created_at: datetime


class PropertyTraceResponse(BaseModel):
    id_property_trace: str
    id_property: str
    date_sale: datetime
    name: str
    value: Decimal
    tax: Decimal
    created_at: datetime


class PropertyResponse(BaseModel):
    id_property: str
    id_owner: str
    name: str
    address: str
    price: Decimal
    code_internal: str
    year: int
    enabled: bool
    created_at: datetime
    updated_at: datetime
    main_image: str | None = None

    # Present only when the related data was requested
    owner: OwnerResponse | None = None
    images: list[PropertyImageResponse] | None = None
    traces: list[PropertyTraceResponse] | None = None


class PagedPropertiesResponse(BaseModel):
    items: list[PropertyResponse]
    current_page: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous: bool
    has_next: bool


# ---- Requests --------------------------------------------------------------

class CreatePropertyRequest(BaseModel):
    id_owner: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=100)
    address: str = Field(min_length=1, max_length=200)
    price: Decimal = Field(gt=0)
    code_internal: str = Field(default="", max_length=50)
    year: int = Field(ge=1900, le=2100)
    enabled: bool = True


class UpdatePropertyRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=200)
    price: Decimal | None = Field(default=None, gt=0)
    code_internal: str | None = Field(default=None, max_length=50)
    year: int | None = Field(default=None, ge=1900, le=2100)
    id_owner: str | None = None
    enabled: bool | None = None


class PropertyStatusRequest(BaseModel):
    enabled: bool


class PropertyImageRequest(BaseModel):
    file: HttpUrl
    enabled: bool = True


class CreatePropertyTraceRequest(BaseModel):
    date_sale: datetime
    name: str = Field(min_length=1, max_length=100)
    value: Decimal = Field(gt=0)
    tax: Decimal = Field(ge=0)


class OwnerRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    address: str = Field(min_length=1, max_length=200)
    photo: str = ""
    birthday: date


class UpdateOwnerRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=200)
    photo: str | None = None
    birthday: date | None = None
