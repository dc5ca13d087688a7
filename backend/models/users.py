"""Beneficiary account model."""

import logging
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import BaseDocumentModel
from .enums import UserRole


logger = logging.getLogger(__name__)

_AADHAAR_RE = re.compile(r"^[0-9]{12}$")
_PHONE_RE = re.compile(r"^[0-9]{10}$")


class UserAddressModel(BaseModel):
    """Registered residential address."""

    model_config = ConfigDict(str_strip_whitespace=True)

    street: str = Field(..., min_length=1)
    district: str = Field(..., min_length=1)
    block: str = Field(..., min_length=1)
    panchayat: str = Field(..., min_length=1)
    state: str = Field(default="Jharkhand", min_length=1)
    pincode: str = Field(..., min_length=6, max_length=6)


class UserModel(BaseDocumentModel):
    """Represents a beneficiary account identified by Aadhaar number."""

    user_id: str = Field(..., min_length=3)
    aadhaar_number: str
    name: str = Field(..., min_length=1)
    phone_number: str
    address: Optional[UserAddressModel] = Field(default=None)
    is_active: bool = Field(default=True)
    is_verified: bool = Field(default=False)
    role: UserRole = Field(default=UserRole.BENEFICIARY)

    @field_validator("aadhaar_number")
    @classmethod
    def _validate_aadhaar(cls, value: str) -> str:
        """Aadhaar numbers are exactly 12 digits."""
        if not _AADHAAR_RE.match(value):
            raise ValueError("{0} is not a valid Aadhaar number!".format(value))
        return value

    @field_validator("phone_number")
    @classmethod
    def _validate_phone(cls, value: str) -> str:
        """Phone numbers are exactly 10 digits."""
        if not _PHONE_RE.match(value):
            raise ValueError("{0} is not a valid phone number!".format(value))
        return value
