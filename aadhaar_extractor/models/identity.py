"""
Identity data models.

Represents the fields recovered from an e-Aadhaar letter.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Optional, Any, List

from ..exceptions import ValidationError
from ..validators import mask_id_number, validate_date, validate_id_number, validate_name

GENDER_MALE = "Male"
GENDER_FEMALE = "Female"
GENDER_NOT_SPECIFIED = "Not specified"

GENDERS = (GENDER_MALE, GENDER_FEMALE, GENDER_NOT_SPECIFIED)

MANDATORY_FIELDS = ("id_number", "name", "date_of_birth")


@dataclass(frozen=True)
class ExtractedIdentity:
    """
    Identity extracted from one document.

    Only constructed for a successful extraction: the ID number must pass
    structural and checksum validation, the name must be plausible and the
    date of birth must be a DD/MM/YYYY date. Immutable and never persisted
    by this package.
    """

    name: str
    date_of_birth: str  # DD/MM/YYYY
    id_number: str  # 12 digits, no spaces
    gender: str = GENDER_NOT_SPECIFIED

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationError("Name is required", field_name="name")
        validate_name(self.name)

        if not self.date_of_birth:
            raise ValidationError("Date of birth is required", field_name="date_of_birth")
        # Birth-year bounds are applied by the finders; only the shape is checked here
        if validate_date(self.date_of_birth, 1000, 9999) != self.date_of_birth:
            raise ValidationError(
                "Date of birth must be DD/MM/YYYY",
                field_name="date_of_birth",
                field_value=self.date_of_birth,
            )

        validate_id_number(self.id_number)
        if self.gender not in GENDERS:
            raise ValidationError(
                "Unknown gender value",
                field_name="gender",
                field_value=self.gender,
                expected=", ".join(GENDERS),
            )

    @property
    def formatted_id_number(self) -> str:
        """ID number in the printed ``dddd dddd dddd`` grouping."""
        n = self.id_number
        return f"{n[0:4]} {n[4:8]} {n[8:12]}"

    @property
    def masked_id_number(self) -> str:
        """ID number with all but the last four digits hidden (safe for logs)."""
        return mask_id_number(self.id_number)

    def to_dict(self) -> dict[str, Any]:
        """Payload consumed by the registration form."""
        return {
            "name": self.name,
            "dob": self.date_of_birth,
            "aadhar": self.id_number,
            "gender": self.gender,
        }

    def __repr__(self) -> str:
        return (
            f"ExtractedIdentity(name={self.name!r}, date_of_birth={self.date_of_birth!r}, "
            f"id_number={self.masked_id_number!r}, gender={self.gender!r})"
        )


@dataclass(frozen=True)
class FieldSet:
    """
    Fields produced by one extraction strategy attempt.

    Any field may be missing; ``is_complete`` tells whether the mandatory
    ones (ID number, name, date of birth) were all found.
    """

    id_number: Optional[str] = None
    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: str = GENDER_NOT_SPECIFIED

    def missing_fields(self) -> List[str]:
        return [f for f in MANDATORY_FIELDS if not getattr(self, f)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def to_identity(self) -> ExtractedIdentity:
        """
        Build the final identity.

        Raises:
            ValidationError: if a mandatory field is missing or invalid
        """
        return ExtractedIdentity(
            name=self.name or "",
            date_of_birth=self.date_of_birth or "",
            id_number=self.id_number or "",
            gender=self.gender or GENDER_NOT_SPECIFIED,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.id_number:
            data["id_number"] = mask_id_number(self.id_number)
        return data
