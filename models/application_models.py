"""
Rental Application Models

Pydantic models for the rental application document:
- Python attribute names are snake_case; the stored document uses the
  camelCase names of the original form (alias_generator=to_camel).
- ApplicationDraft is the editable in-memory copy, ApplicationRecord the
  persisted one.
- Empty strings never reach the datastore (see strip_empty_fields).
"""

import mimetypes
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiofiles
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

def strip_empty_fields(value: Any) -> Any:
    """
    Drop keys holding an empty string (or None) from a document, recursing
    into nested dicts and lists of dicts. Lists themselves are kept, even when empty.
    """
    if isinstance(value, dict):
        return {
            key: strip_empty_fields(item)
            for key, item in value.items()
            if item != "" and item is not None
        }
    if isinstance(value, list):
        return [strip_empty_fields(item) for item in value]
    return value

class Occupant(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    relationship: str = ""
    dob: str = ""

    def is_blank(self) -> bool:
        return not any(value.strip() for value in (self.name, self.relationship, self.dob))

class Attachment(BaseModel):
    """A resolved attachment reference: durable retrieval URL plus display name."""
    name: str
    url: str

class ApplicationFields(BaseModel):
    """Scalar fields shared by the draft and the persisted record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Application details
    date_of_application: str = ""
    desired_move_in_date: str = ""
    applying_for: str = ""
    email: str = ""
    phone: str = ""

    # Applicant
    applicant_full_name: str = ""
    applicant_dob: str = ""
    applicant_ssn: str = ""

    # Co-resident (present when co_resident_name is set)
    co_resident_name: str = ""
    co_resident_dob: str = ""
    co_resident_ssn: str = ""

    # Present address
    present_address: str = ""
    present_city: str = ""
    present_state: str = ""
    present_zip: str = ""
    present_landlord_name: str = ""
    present_landlord_phone: str = ""
    present_monthly_rent: str = ""
    present_reason_for_leaving: str = ""

    # Previous address
    previous_address: str = ""
    previous_city: str = ""
    previous_state: str = ""
    previous_zip: str = ""
    previous_landlord_name: str = ""
    previous_landlord_phone: str = ""
    previous_monthly_rent: str = ""
    previous_reason_for_leaving: str = ""

    # Employment
    company_name: str = ""
    company_address: str = ""
    company_phone: str = ""
    time_at_company: str = ""
    job_role: str = ""
    weekly_income: str = ""

    @classmethod
    def scalar_field_names(cls) -> List[str]:
        return list(ApplicationFields.model_fields)

    @classmethod
    def resolve_field_name(cls, name: str) -> str:
        """Map a camelCase document name or a snake_case attribute to the attribute name."""
        for attr in cls.scalar_field_names():
            if name == attr or name == to_camel(attr):
                return attr
        raise KeyError(f"Unknown or non-editable application field: {name}")

    def scalar_values(self) -> Dict[str, str]:
        return {attr: getattr(self, attr) for attr in self.scalar_field_names()}

    @property
    def has_co_resident(self) -> bool:
        return bool(self.co_resident_name.strip())

class ApplicationDraft(ApplicationFields):
    """Editable copy of an application; may be incomplete."""
    additional_occupants: List[Occupant] = Field(default_factory=lambda: [Occupant()])

    @classmethod
    def from_record(cls, record: 'ApplicationRecord') -> 'ApplicationDraft':
        occupants = [occupant.model_copy() for occupant in record.additional_occupants]
        return cls(**record.scalar_values(), additional_occupants=occupants or [Occupant()])

class ApplicationRecord(ApplicationFields):
    """The persisted application of one tenant."""
    id: Optional[str] = None
    user_id: str = ""
    additional_occupants: List[Occupant] = Field(default_factory=list)
    uploaded_files: List[Attachment] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_document(self) -> Dict[str, Any]:
        """Document body for the datastore: camelCase keys, no id, no empty strings."""
        data = self.model_dump(by_alias=True, exclude={'id'})
        return strip_empty_fields(data)

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> 'ApplicationRecord':
        return cls.model_validate({**data, 'id': doc_id})

class ApplicationSummary(BaseModel):
    """Card shown on the landlord dashboard."""
    id: str
    applicant_full_name: str
    applying_for: str
    email: str
    phone: str
    desired_move_in_date: str
    attachment_count: int
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: ApplicationRecord) -> 'ApplicationSummary':
        return cls(
            id=record.id or "",
            applicant_full_name=record.applicant_full_name,
            applying_for=record.applying_for,
            email=record.email,
            phone=record.phone,
            desired_move_in_date=record.desired_move_in_date,
            attachment_count=len(record.uploaded_files),
            created_at=record.created_at,
        )

@dataclass
class LocalFile:
    """A file selected on the user's device, not yet uploaded."""
    name: str
    content: bytes
    media_type: str = "application/octet-stream"

    @property
    def extension(self) -> str:
        return Path(self.name).suffix

    @property
    def is_image(self) -> bool:
        return self.media_type.startswith("image/")

    @classmethod
    async def from_path(cls, path: Union[str, Path]) -> 'LocalFile':
        path = Path(path)
        async with aiofiles.open(path, 'rb') as f:
            content = await f.read()
        media_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, content=content, media_type=media_type or "application/octet-stream")
