"""Tests for SOAP request envelope construction."""

from decimal import Decimal
from xml.etree import ElementTree

import pytest

from soap_accounts.soap.envelope import (
    SOAP_ENV_NS,
    XSD_NS,
    XSI_NS,
    SoapProperty,
    SoapRequestBuilder,
)

SERVICE_NS = "http://ws.soapAcount/"


@pytest.fixture
def builder() -> SoapRequestBuilder:
    return SoapRequestBuilder(SERVICE_NS)


def _request_element(payload: bytes, method: str) -> ElementTree.Element:
    root = ElementTree.fromstring(payload)
    body = root.find(f"{{{SOAP_ENV_NS}}}Body")
    assert body is not None
    request = body.find(f"{{{SERVICE_NS}}}{method}")
    assert request is not None
    return request


class TestEnvelopeStructure:
    """Tests for the envelope skeleton."""

    def test_returns_utf8_bytes_with_declaration(self, builder: SoapRequestBuilder) -> None:
        payload = builder.build_envelope("getComptes")

        assert isinstance(payload, bytes)
        assert payload.startswith(b"<?xml version='1.0' encoding='utf-8'?>")

    def test_envelope_header_and_body(self, builder: SoapRequestBuilder) -> None:
        root = ElementTree.fromstring(builder.build_envelope("getComptes"))

        assert root.tag == f"{{{SOAP_ENV_NS}}}Envelope"
        assert [child.tag for child in root] == [
            f"{{{SOAP_ENV_NS}}}Header",
            f"{{{SOAP_ENV_NS}}}Body",
        ]

    def test_declares_schema_namespace(self, builder: SoapRequestBuilder) -> None:
        payload = builder.build_envelope("getComptes")

        assert f'xmlns:xsd="{XSD_NS}"'.encode() in payload

    def test_request_without_parameters(self, builder: SoapRequestBuilder) -> None:
        request = _request_element(builder.build_envelope("getComptes"), "getComptes")

        assert len(request) == 0

    def test_method_qualified_by_service_namespace(self) -> None:
        builder = SoapRequestBuilder("urn:other")
        root = ElementTree.fromstring(builder.build_envelope("ping"))

        assert root.find(f"{{{SOAP_ENV_NS}}}Body/{{urn:other}}ping") is not None


class TestPropertySerialization:
    """Tests for request parameters."""

    def test_string_properties_in_order(self, builder: SoapRequestBuilder) -> None:
        payload = builder.build_envelope(
            "createCompte",
            [SoapProperty("solde", "1500.50"), SoapProperty("type", "EPARGNE")],
        )
        request = _request_element(payload, "createCompte")

        assert [child.tag for child in request] == ["solde", "type"]
        assert request[0].text == "1500.50"
        assert request[0].get(f"{{{XSI_NS}}}type") == "xsd:string"
        assert request[1].text == "EPARGNE"

    def test_typed_long_property(self, builder: SoapRequestBuilder) -> None:
        payload = builder.build_envelope("deleteCompte", [SoapProperty("id", 42, xsd_type="long")])
        request = _request_element(payload, "deleteCompte")

        assert request[0].tag == "id"
        assert request[0].text == "42"
        assert request[0].get(f"{{{XSI_NS}}}type") == "xsd:long"

    def test_none_is_nil(self, builder: SoapRequestBuilder) -> None:
        payload = builder.build_envelope("createCompte", [SoapProperty("solde", None)])
        elem = _request_element(payload, "createCompte")[0]

        assert elem.get(f"{{{XSI_NS}}}nil") == "true"
        assert elem.get(f"{{{XSI_NS}}}type") is None
        assert elem.text is None

    def test_boolean_lowercase(self, builder: SoapRequestBuilder) -> None:
        payload = builder.build_envelope("m", [SoapProperty("flag", True, xsd_type="boolean")])

        assert _request_element(payload, "m")[0].text == "true"

    def test_decimal_keeps_scale(self, builder: SoapRequestBuilder) -> None:
        payload = builder.build_envelope("m", [SoapProperty("solde", Decimal("10.50"))])

        assert _request_element(payload, "m")[0].text == "10.50"

    def test_special_characters_escaped(self, builder: SoapRequestBuilder) -> None:
        payload = builder.build_envelope("m", [SoapProperty("note", "a < b & c")])

        assert b"a &lt; b &amp; c" in payload
        assert _request_element(payload, "m")[0].text == "a < b & c"
