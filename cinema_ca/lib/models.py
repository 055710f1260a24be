"""Result models for CA creation."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass
class ValidationResult:
    """Fields read back from an issued certificate for operator confirmation."""

    subject: str
    issuer: str
    serial_number: str
    not_before: datetime
    not_after: datetime
    is_ca: bool


@dataclass
class CAResult:
    """Result from CA creation.

    Contains output file paths plus the identity of the issued certificate.
    """

    key_path: Path
    cert_path: Path
    serial_number: str
    dn_qualifier: str
    subject: str
    issuer: str
