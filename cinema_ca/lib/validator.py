"""Re-parse and sanity-check an issued CA certificate."""

from pathlib import Path

from cryptography import x509

from .cert_utils import deserialize_certificate, format_slash_name, get_certificate_serial_hex
from .errors import ValidationError
from .models import ValidationResult


def validate_certificate_bytes(pem_data: bytes) -> ValidationResult:
    """Parse PEM certificate bytes and verify the self-signature.

    Raises:
        ValidationError: If the bytes are not a well-formed certificate or the
            signature does not verify against the certificate's own key
    """
    try:
        cert = deserialize_certificate(pem_data)
    except ValueError as e:
        raise ValidationError(f"certificate could not be parsed: {e}") from e

    try:
        cert.verify_directly_issued_by(cert)
    except Exception as e:
        raise ValidationError(f"certificate is not validly self-signed: {e}") from e

    try:
        bc = cert.extensions.get_extension_for_class(x509.BasicConstraints)
        is_ca = bc.value.ca
    except x509.ExtensionNotFound:
        is_ca = False

    return ValidationResult(
        subject=format_slash_name(cert.subject),
        issuer=format_slash_name(cert.issuer),
        serial_number=get_certificate_serial_hex(cert),
        not_before=cert.not_valid_before_utc,
        not_after=cert.not_valid_after_utc,
        is_ca=is_ca,
    )


def validate_certificate_file(cert_path: Path) -> ValidationResult:
    """Read a PEM certificate from disk and validate it."""
    try:
        pem_data = Path(cert_path).read_bytes()
    except OSError as e:
        raise ValidationError(f"could not read certificate {cert_path}: {e}") from e
    return validate_certificate_bytes(pem_data)
