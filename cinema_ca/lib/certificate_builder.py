"""Certificate builder for the self-signed CA certificate."""

from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from .cert_utils import generate_serial_number
from .config import DEFAULT_VALIDITY_DAYS, DistinguishedName
from .errors import InvalidInputError, IssuanceError


class CertificateBuilder:
    """Builds the X.509v3 self-signed CA certificate."""

    @staticmethod
    def build_root_ca(
        subject_dn: DistinguishedName,
        private_key: RSAPrivateKey,
        validity_days: int = DEFAULT_VALIDITY_DAYS,
    ) -> x509.Certificate:
        """Build self-signed CA certificate.

        Subject and issuer are the same name. Extensions: basicConstraints
        CA:TRUE (critical), keyUsage keyCertSign+cRLSign (critical),
        subjectKeyIdentifier and authorityKeyIdentifier from the key.

        Args:
            subject_dn: Distinguished name for certificate subject and issuer
            private_key: RSA private key for signing
            validity_days: Certificate validity period in days

        Returns:
            Self-signed X.509 certificate signed with SHA-256/RSA

        Raises:
            InvalidInputError: If validity_days is not positive
            IssuanceError: If the certificate cannot be built or signed
        """
        if validity_days <= 0:
            raise InvalidInputError(f"validity must be a positive number of days, got {validity_days}")

        try:
            subject = subject_dn.to_x509_name()
            public_key = private_key.public_key()
            not_before = datetime.now(timezone.utc).replace(microsecond=0)
            not_after = not_before + timedelta(days=validity_days)

            builder = (
                x509.CertificateBuilder()
                .subject_name(subject)
                .issuer_name(subject)
                .public_key(public_key)
                .serial_number(generate_serial_number())
                .not_valid_before(not_before)
                .not_valid_after(not_after)
                .add_extension(
                    x509.BasicConstraints(ca=True, path_length=None),
                    critical=True,
                )
                .add_extension(
                    x509.KeyUsage(
                        digital_signature=False,
                        content_commitment=False,
                        key_encipherment=False,
                        data_encipherment=False,
                        key_agreement=False,
                        key_cert_sign=True,
                        crl_sign=True,
                        encipher_only=False,
                        decipher_only=False,
                    ),
                    critical=True,
                )
                .add_extension(
                    x509.SubjectKeyIdentifier.from_public_key(public_key),
                    critical=False,
                )
                .add_extension(
                    x509.AuthorityKeyIdentifier.from_issuer_public_key(public_key),
                    critical=False,
                )
            )

            return builder.sign(private_key, hashes.SHA256())
        except Exception as e:
            raise IssuanceError(f"certificate issuance failed: {e}") from e
