from enum import Enum


class ClaimKind(str, Enum):
    PRESCRIPTION_PENDING = "rxTba"  # Prescription claims to be adjudicated
    PRESCRIPTION_HISTORY = "rxHistory"
    MEDICAL_SERVICE = "medHistory"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class WarningCode(str, Enum):
    INVALID_ELEMENT = "INVALID_ELEMENT"
    UNPARSEABLE_DATE = "UNPARSEABLE_DATE"
    MISSING_LINES = "MISSING_LINES"
    MALFORMED_SECTION = "MALFORMED_SECTION"
