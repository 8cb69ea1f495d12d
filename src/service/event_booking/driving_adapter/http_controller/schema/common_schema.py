from typing import List, Optional

from pydantic import BaseModel, Field


class DeleteResponse(BaseModel):
    success: bool = True
    message: str


# Related records nested into event and booking reads


class VenueSummaryResponse(BaseModel):
    id: int
    name: str
    address: str
    city: str
    country: str
    capacity: int
    images: List[str] = Field(default_factory=list)

    class Config:
        from_attributes = True


class CategorySummaryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class UserSummaryResponse(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True
