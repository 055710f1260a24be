"""Certificate utility functions for key generation, serialization, and subject formatting."""

import base64
import hashlib
import uuid

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from cryptography.x509 import oid

from .config import DEFAULT_KEY_SIZE, RECOMMENDED_MIN_KEY_SIZE, RSA_PUBLIC_EXPONENT
from .errors import DigestError, InvalidInputError, KeyGenerationError
from .logging_config import LOGGER

# OpenSSL short labels used in slash-delimited subjects
SHORT_NAMES: dict[x509.ObjectIdentifier, str] = {
    oid.NameOID.COUNTRY_NAME: "C",
    oid.NameOID.STATE_OR_PROVINCE_NAME: "ST",
    oid.NameOID.LOCALITY_NAME: "L",
    oid.NameOID.ORGANIZATION_NAME: "O",
    oid.NameOID.ORGANIZATIONAL_UNIT_NAME: "OU",
    oid.NameOID.COMMON_NAME: "CN",
    oid.NameOID.EMAIL_ADDRESS: "emailAddress",
    oid.NameOID.DN_QUALIFIER: "dnQualifier",
}


def generate_private_key(key_size: int = DEFAULT_KEY_SIZE) -> RSAPrivateKey:
    """Generate RSA private key with specified size.

    Raises:
        KeyGenerationError: If the backend rejects the key size or generation fails
    """
    if key_size < RECOMMENDED_MIN_KEY_SIZE:
        LOGGER.warning(
            "Key size %s is below the recommended minimum of %s bits",
            key_size,
            RECOMMENDED_MIN_KEY_SIZE,
        )
    try:
        return rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=key_size,
        )
    except Exception as e:
        raise KeyGenerationError(f"RSA key generation failed: {e}") from e


def serialize_private_key(key: RSAPrivateKey) -> bytes:
    """Serialize private key to PEM format (PKCS8, no encryption)."""
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def deserialize_private_key(pem_data: bytes) -> RSAPrivateKey:
    """Deserialize private key from PEM bytes."""
    key = serialization.load_pem_private_key(pem_data, password=None)
    if not isinstance(key, RSAPrivateKey):
        raise ValueError("expected RSA private key")
    return key


def serialize_certificate(cert: x509.Certificate) -> bytes:
    """Serialize certificate to PEM format."""
    return cert.public_bytes(serialization.Encoding.PEM)


def deserialize_certificate(pem_data: bytes) -> x509.Certificate:
    """Deserialize certificate from PEM bytes."""
    return x509.load_pem_x509_certificate(pem_data)


def generate_serial_number() -> int:
    """Generate certificate serial number from UUID4.

    UUID v4 gives a positive 128-bit value (~122 bits of randomness), well
    inside the 20-octet limit for X.509 serials and distinct across reissues.
    """
    return uuid.uuid4().int


def get_certificate_serial_hex(cert: x509.Certificate) -> str:
    """Return certificate serial number as hex with colons (e.g., 3A:F2:B1:...)."""
    serial_hex = f"{cert.serial_number:X}"
    if len(serial_hex) % 2 != 0:
        serial_hex = "0" + serial_hex
    return ":".join(serial_hex[i : i + 2] for i in range(0, len(serial_hex), 2))


def public_key_material(public_key: RSAPublicKey) -> bytes:
    """Return the raw key bytes carried in the SubjectPublicKeyInfo bit string.

    For RSA this is the PKCS#1 RSAPublicKey DER. For 2048 and 4096 bit keys
    it equals the SPKI encoding with its 24-byte header removed.
    """
    return public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.PKCS1,
    )


def derive_dn_qualifier(public_key: RSAPublicKey) -> str:
    """Derive the dnQualifier for a public key.

    base64(SHA-1(raw public key bytes)), the digital-cinema convention for
    binding a certificate subject to its key. The result may contain "/".

    Raises:
        DigestError: If the key is not RSA or cannot be encoded
    """
    if not isinstance(public_key, RSAPublicKey):
        raise DigestError(f"dnQualifier requires an RSA public key, got {type(public_key).__name__}")
    try:
        material = public_key_material(public_key)
    except ValueError as e:
        raise DigestError(f"could not encode public key: {e}") from e

    digest = hashlib.sha1(material).digest()
    return base64.b64encode(digest).decode("ascii")


def _escape_slash_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("/", "\\/")


def format_slash_name(name: x509.Name) -> str:
    """Render an x509.Name as /C=../ST=../CN=.. in encoded order.

    Backslash and "/" inside values are backslash-escaped so that a
    dnQualifier containing "/" does not split into a new component.
    """
    parts = []
    for attribute in name:
        label = SHORT_NAMES.get(attribute.oid, attribute.oid.dotted_string)
        value = attribute.value
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        parts.append(f"/{label}={_escape_slash_value(value)}")
    return "".join(parts)


def parse_slash_name(text: str) -> list[tuple[str, str]]:
    """Parse a slash-delimited subject back into unescaped (label, value) pairs.

    Raises:
        InvalidInputError: If the text is not a well-formed slash-delimited subject
    """
    if not text.startswith("/"):
        raise InvalidInputError(f"subject must start with '/': {text!r}")

    components: list[str] = []
    current: list[str] = []
    index = 1
    while index < len(text):
        char = text[index]
        if char == "\\":
            if index + 1 >= len(text):
                raise InvalidInputError(f"dangling escape at end of subject: {text!r}")
            current.append(text[index + 1])
            index += 2
            continue
        if char == "/":
            components.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    components.append("".join(current))

    # Labels never contain "="; values may (base64 padding)
    pairs = []
    for component in components:
        label, sep, value = component.partition("=")
        if not sep or not label:
            raise InvalidInputError(f"malformed subject component {component!r}")
        pairs.append((label, value))
    return pairs
