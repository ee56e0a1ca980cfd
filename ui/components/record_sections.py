"""Read-only section layout of an application, shared by both dashboards."""

from typing import List, Tuple

from constants import FormConstants
from models.application_models import ApplicationRecord

Section = Tuple[str, List[Tuple[str, str]]]

_SECTIONS = (
    ("Application Details", ('dateOfApplication', 'desiredMoveInDate', 'applyingFor', 'email', 'phone')),
    ("Personal Information", ('applicantFullName', 'applicantDob', 'applicantSsn')),
    ("Co-Resident Information", ('coResidentName', 'coResidentDob', 'coResidentSsn')),
    ("Present Address", (
        'presentAddress', 'presentCity', 'presentState', 'presentZip',
        'presentLandlordName', 'presentLandlordPhone', 'presentMonthlyRent', 'presentReasonForLeaving',
    )),
    ("Previous Address", (
        'previousAddress', 'previousCity', 'previousState', 'previousZip',
        'previousLandlordName', 'previousLandlordPhone', 'previousMonthlyRent', 'previousReasonForLeaving',
    )),
    ("Employment Information", (
        'companyName', 'companyAddress', 'companyPhone', 'timeAtCompany', 'jobRole', 'weeklyIncome',
    )),
)

def application_sections(record: ApplicationRecord) -> List[Section]:
    """
    Titled (label, value) rows for display. Blank values are skipped, and so
    is any section left with no rows (e.g. no co-resident, no previous address).
    """
    document = record.model_dump(by_alias=True)
    sections = []
    for title, fields in _SECTIONS:
        rows = [
            (FormConstants.FIELD_LABELS[name], document[name])
            for name in fields
            if document.get(name, "").strip()
        ]
        if rows:
            sections.append((title, rows))

    occupants = [
        (occupant.name or "(unnamed)", ", ".join(part for part in (occupant.relationship, occupant.dob) if part))
        for occupant in record.additional_occupants
        if not occupant.is_blank()
    ]
    if occupants:
        sections.append(("Additional Occupants", occupants))

    if record.uploaded_files:
        sections.append(("Documents", [(f.name, f.url) for f in record.uploaded_files]))
    return sections
