"""Test fixtures for cinema_ca tests."""

from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from cinema_ca.lib.ca_utils import build_subject
from cinema_ca.lib.cert_utils import derive_dn_qualifier, generate_private_key
from cinema_ca.lib.certificate_builder import CertificateBuilder
from cinema_ca.lib.config import CAConfig, DistinguishedName, SubjectAttributes


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Return temporary directory for test output artifacts."""
    return tmp_path


@pytest.fixture
def ca_config() -> CAConfig:
    """Return test CA configuration."""
    return CAConfig(key_size=2048, validity_days=800)


@pytest.fixture
def root_key() -> RSAPrivateKey:
    """Generate RSA private key for the CA."""
    return generate_private_key(key_size=2048)


@pytest.fixture
def full_attributes() -> SubjectAttributes:
    """Return subject attributes with every optional field set."""
    return SubjectAttributes(
        common_name="Test CA",
        country="GB",
        state="London",
        locality="London",
        organization="Test Org",
        organizational_unit="Test Unit",
        email="ca@example.com",
    )


@pytest.fixture
def minimal_attributes() -> SubjectAttributes:
    """Return subject attributes with only the common name."""
    return SubjectAttributes(common_name="Test CA")


@pytest.fixture
def root_dn(root_key: RSAPrivateKey, full_attributes: SubjectAttributes) -> DistinguishedName:
    """Return CA distinguished name bound to root_key."""
    return build_subject(full_attributes, derive_dn_qualifier(root_key.public_key()))


@pytest.fixture
def root_cert(root_key: RSAPrivateKey, root_dn: DistinguishedName) -> x509.Certificate:
    """Generate self-signed CA certificate."""
    return CertificateBuilder.build_root_ca(
        subject_dn=root_dn,
        private_key=root_key,
        validity_days=800,
    )
