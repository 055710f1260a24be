"""Tests for subject construction."""

import pytest
from cryptography.x509.oid import NameOID

from cinema_ca.lib.ca_utils import build_subject, normalize_attributes
from cinema_ca.lib.cert_utils import parse_slash_name
from cinema_ca.lib.config import SubjectAttributes
from cinema_ca.lib.errors import InvalidInputError, MissingCommonNameError

QUALIFIER = "k5Zp/9L2b0YhN1Xq7/Vw3aBcDeE="


class TestBuildSubject:
    """Tests for build_subject."""

    def test_full_subject_order(self, full_attributes: SubjectAttributes) -> None:
        """All components appear in C, ST, L, O, OU, CN, emailAddress, dnQualifier order."""
        subject_dn = build_subject(full_attributes, QUALIFIER)

        oids = [attribute.oid for attribute in subject_dn.to_x509_name()]
        assert oids == [
            NameOID.COUNTRY_NAME,
            NameOID.STATE_OR_PROVINCE_NAME,
            NameOID.LOCALITY_NAME,
            NameOID.ORGANIZATION_NAME,
            NameOID.ORGANIZATIONAL_UNIT_NAME,
            NameOID.COMMON_NAME,
            NameOID.EMAIL_ADDRESS,
            NameOID.DN_QUALIFIER,
        ]

    def test_minimal_subject_has_cn_and_qualifier_only(
        self, minimal_attributes: SubjectAttributes
    ) -> None:
        """Unset optional fields produce no component."""
        subject_dn = build_subject(minimal_attributes, QUALIFIER)

        assert subject_dn.components() == [
            (NameOID.COMMON_NAME, "Test CA"),
            (NameOID.DN_QUALIFIER, QUALIFIER),
        ]

    def test_empty_strings_are_omitted(self) -> None:
        """Empty and whitespace-only optional fields are treated as absent."""
        attributes = SubjectAttributes(
            common_name="Test CA", country="", state="  ", organization="Test Org", email=""
        )
        subject_dn = build_subject(attributes, QUALIFIER)

        assert [value for _, value in subject_dn.components()] == ["Test Org", "Test CA", QUALIFIER]
        assert all(value for _, value in subject_dn.components())

    def test_sparse_subject_keeps_relative_order(self) -> None:
        """Order is fixed regardless of which optional fields are present."""
        attributes = SubjectAttributes(
            common_name="Test CA", email="ca@example.com", locality="Leeds", country="GB"
        )
        subject_dn = build_subject(attributes, QUALIFIER)

        assert subject_dn.to_slash_string() == (
            "/C=GB/L=Leeds/CN=Test CA/emailAddress=ca@example.com"
            "/dnQualifier=k5Zp\\/9L2b0YhN1Xq7\\/Vw3aBcDeE="
        )

    def test_qualifier_is_always_last(self, full_attributes: SubjectAttributes) -> None:
        """dnQualifier is appended after every caller attribute."""
        subject_dn = build_subject(full_attributes, QUALIFIER)
        assert subject_dn.components()[-1] == (NameOID.DN_QUALIFIER, QUALIFIER)

    def test_slash_string_reparses_to_original_qualifier(
        self, full_attributes: SubjectAttributes
    ) -> None:
        """Escaped '/' in the qualifier parses back to the raw digest."""
        pairs = parse_slash_name(build_subject(full_attributes, QUALIFIER).to_slash_string())

        assert [label for label, _ in pairs] == [
            "C", "ST", "L", "O", "OU", "CN", "emailAddress", "dnQualifier",
        ]
        assert pairs[-1] == ("dnQualifier", QUALIFIER)

    @pytest.mark.parametrize("common_name", ["", "   "])
    def test_missing_common_name_raises(self, common_name: str) -> None:
        """Blank CN is rejected."""
        with pytest.raises(MissingCommonNameError):
            build_subject(SubjectAttributes(common_name=common_name), QUALIFIER)

    def test_missing_common_name_is_invalid_input(self) -> None:
        """MissingCommonNameError is an InvalidInputError."""
        with pytest.raises(InvalidInputError):
            build_subject(SubjectAttributes(common_name=""), QUALIFIER)

    def test_invalid_country_raises(self) -> None:
        """Country must be a two-letter code."""
        with pytest.raises(InvalidInputError, match="invalid subject attribute"):
            build_subject(SubjectAttributes(common_name="Test CA", country="GBR"), QUALIFIER)

    def test_empty_qualifier_raises(self, minimal_attributes: SubjectAttributes) -> None:
        """A qualifier is required."""
        with pytest.raises(InvalidInputError):
            build_subject(minimal_attributes, "")


class TestNormalizeAttributes:
    """Tests for normalize_attributes."""

    def test_strips_whitespace(self) -> None:
        """Values are stripped."""
        attributes = normalize_attributes(
            SubjectAttributes(common_name="  Test CA ", organization=" Test Org")
        )
        assert attributes.common_name == "Test CA"
        assert attributes.organization == "Test Org"

    def test_empty_values_become_none(self) -> None:
        """Empty optional values become None."""
        attributes = normalize_attributes(SubjectAttributes(common_name="Test CA", state=""))
        assert attributes.state is None
