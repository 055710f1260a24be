"""Subject construction helpers."""

from .config import DistinguishedName, SubjectAttributes
from .errors import InvalidInputError, MissingCommonNameError


def normalize_attributes(attributes: SubjectAttributes) -> SubjectAttributes:
    """Strip surrounding whitespace and map empty optional fields to None.

    Raises:
        MissingCommonNameError: If common_name is missing or blank
    """

    def clean(value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    common_name = clean(attributes.common_name)
    if common_name is None:
        raise MissingCommonNameError("common name is required")

    return SubjectAttributes(
        common_name=common_name,
        country=clean(attributes.country),
        state=clean(attributes.state),
        locality=clean(attributes.locality),
        organization=clean(attributes.organization),
        organizational_unit=clean(attributes.organizational_unit),
        email=clean(attributes.email),
    )


def build_subject(attributes: SubjectAttributes, dn_qualifier: str) -> DistinguishedName:
    """Build DN from caller attributes + the key-derived dnQualifier.

    Args:
        attributes: Caller-supplied identity attributes
        dn_qualifier: base64 digest from derive_dn_qualifier

    Returns:
        DistinguishedName in canonical order with empty fields omitted

    Raises:
        MissingCommonNameError: If common_name is missing or blank
        InvalidInputError: If an attribute value is not encodable (e.g. 3-letter country)
    """
    if not dn_qualifier:
        raise InvalidInputError("dnQualifier must not be empty")

    subject_dn = DistinguishedName(
        attributes=normalize_attributes(attributes),
        dn_qualifier=dn_qualifier,
    )

    try:
        subject_dn.to_x509_name()
    except ValueError as e:
        raise InvalidInputError(f"invalid subject attribute: {e}") from e

    return subject_dn
