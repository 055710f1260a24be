"""CA configuration and subject name dataclasses."""

from dataclasses import dataclass

from cryptography import x509
from cryptography.x509 import oid

VERSION = "1.0.0"

DEFAULT_KEY_SIZE = 2048
DEFAULT_VALIDITY_DAYS = 800
RECOMMENDED_MIN_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


@dataclass
class CAConfig:
    """Key and validity parameters for a single CA run."""

    key_size: int = DEFAULT_KEY_SIZE
    validity_days: int = DEFAULT_VALIDITY_DAYS


@dataclass(frozen=True)
class SubjectAttributes:
    """Identity attributes supplied by the caller.

    Optional fields set to None or "" are left out of the subject entirely.
    """

    common_name: str
    country: str | None = None
    state: str | None = None
    locality: str | None = None
    organization: str | None = None
    organizational_unit: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class DistinguishedName:
    """X.509 Subject Distinguished Name including the key-bound dnQualifier."""

    attributes: SubjectAttributes
    dn_qualifier: str

    def components(self) -> list[tuple[x509.ObjectIdentifier, str]]:
        """Return present (oid, value) pairs in canonical subject order.

        Order: C, ST, L, O, OU, CN, emailAddress, dnQualifier.
        """
        attrs = self.attributes
        ordered = [
            (oid.NameOID.COUNTRY_NAME, attrs.country),
            (oid.NameOID.STATE_OR_PROVINCE_NAME, attrs.state),
            (oid.NameOID.LOCALITY_NAME, attrs.locality),
            (oid.NameOID.ORGANIZATION_NAME, attrs.organization),
            (oid.NameOID.ORGANIZATIONAL_UNIT_NAME, attrs.organizational_unit),
            (oid.NameOID.COMMON_NAME, attrs.common_name),
            (oid.NameOID.EMAIL_ADDRESS, attrs.email),
            (oid.NameOID.DN_QUALIFIER, self.dn_qualifier),
        ]
        return [(attr_oid, value) for attr_oid, value in ordered if value]

    def to_x509_name(self) -> x509.Name:
        """Convert to cryptography x509.Name for certificate generation."""
        return x509.Name(
            [x509.NameAttribute(attr_oid, value) for attr_oid, value in self.components()]
        )

    def to_slash_string(self) -> str:
        """Render as an escaped slash-delimited subject (/C=../CN=../dnQualifier=..)."""
        from .cert_utils import format_slash_name

        return format_slash_name(self.to_x509_name())
