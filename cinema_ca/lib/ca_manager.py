"""CA manager: runs the key -> dnQualifier -> subject -> certificate pipeline."""

import os
import tempfile
from pathlib import Path

from .ca_utils import build_subject, normalize_attributes
from .cert_utils import (
    derive_dn_qualifier,
    deserialize_private_key,
    generate_private_key,
    parse_slash_name,
    serialize_certificate,
    serialize_private_key,
)
from .certificate_builder import CertificateBuilder
from .config import CAConfig, SubjectAttributes
from .errors import ArtifactWriteError, InvalidInputError, ValidationError
from .logging_config import LOGGER
from .models import CAResult
from .validator import validate_certificate_file

KEY_FILE_MODE = 0o600
CERT_FILE_MODE = 0o644


def write_artifact(path: Path, data: bytes, mode: int) -> None:
    """Atomically write data to path with the given permissions.

    Data is written to a temporary file in the destination directory and
    renamed into place, so a failure never leaves a truncated file at path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class CAManager:
    """Creates a self-signed CA key pair and certificate."""

    def __init__(self, config: CAConfig) -> None:
        """Initialize CA manager with configuration.

        Args:
            config: Key size and validity period
        """
        self.config = config

    def create_ca(
        self,
        attributes: SubjectAttributes,
        key_path: Path,
        cert_path: Path,
    ) -> CAResult:
        """Generate key, build subject, issue certificate, write and re-validate.

        Input is checked before any key is generated, so invalid input
        writes nothing.

        Args:
            attributes: Subject identity attributes (common_name required)
            key_path: Output path for the PEM private key
            cert_path: Output path for the PEM certificate

        Returns:
            CAResult with file paths, serial number, dnQualifier, subject and issuer

        Raises:
            CAError: Subclass matching the stage that failed
        """
        attributes = normalize_attributes(attributes)
        key_path, cert_path = self._check_output_paths(key_path, cert_path)

        LOGGER.debug("Generating %s-bit RSA key", self.config.key_size)
        private_key = generate_private_key(self.config.key_size)

        dn_qualifier = derive_dn_qualifier(private_key.public_key())
        LOGGER.debug("Derived dnQualifier %s", dn_qualifier)

        subject_dn = build_subject(attributes, dn_qualifier)
        subject = subject_dn.to_slash_string()
        LOGGER.debug("Subject: %s", subject)

        LOGGER.debug(
            "Signing self-signed CA certificate valid for %s days with SHA-256",
            self.config.validity_days,
        )
        cert = CertificateBuilder.build_root_ca(
            subject_dn=subject_dn,
            private_key=private_key,
            validity_days=self.config.validity_days,
        )

        self._write(key_path, serialize_private_key(private_key), KEY_FILE_MODE)
        LOGGER.debug("Wrote key to %s", key_path)
        self._write(cert_path, serialize_certificate(cert), CERT_FILE_MODE)
        LOGGER.debug("Wrote certificate to %s", cert_path)

        validation = validate_certificate_file(cert_path)
        if validation.subject != subject:
            raise ValidationError(
                f"subject read back from {cert_path} does not match: {validation.subject!r} != {subject!r}"
            )
        if not validation.is_ca:
            raise ValidationError(f"certificate {cert_path} is missing basicConstraints CA:TRUE")
        if parse_slash_name(validation.subject)[-1] != ("dnQualifier", dn_qualifier):
            raise ValidationError(f"certificate {cert_path} does not end with the derived dnQualifier")

        try:
            written_key = deserialize_private_key(key_path.read_bytes())
        except (OSError, ValueError) as e:
            raise ValidationError(f"key file {key_path} could not be read back: {e}") from e
        if written_key.public_key().public_numbers() != cert.public_key().public_numbers():
            raise ValidationError(f"key file {key_path} does not match certificate {cert_path}")

        return CAResult(
            key_path=key_path,
            cert_path=cert_path,
            serial_number=validation.serial_number,
            dn_qualifier=dn_qualifier,
            subject=validation.subject,
            issuer=validation.issuer,
        )

    @staticmethod
    def _write(path: Path, data: bytes, mode: int) -> None:
        """Write an artifact, reporting filesystem failures as ArtifactWriteError."""
        try:
            write_artifact(path, data, mode)
        except OSError as e:
            raise ArtifactWriteError(f"could not write {path}: {e}") from e

    @staticmethod
    def _check_output_paths(key_path: Path | str | None, cert_path: Path | str | None) -> tuple[Path, Path]:
        """Reject missing or identical output paths."""
        if not key_path:
            raise InvalidInputError("key file path is required")
        if not cert_path:
            raise InvalidInputError("certificate file path is required")

        key_path = Path(key_path)
        cert_path = Path(cert_path)
        if key_path.resolve() == cert_path.resolve():
            raise InvalidInputError("key and certificate must be written to different files")
        return key_path, cert_path
