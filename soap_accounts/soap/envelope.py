"""SOAP 1.1 request envelope construction."""

from dataclasses import dataclass
from typing import Any, Sequence
from xml.etree import ElementTree

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XSD_NS = "http://www.w3.org/2001/XMLSchema"

ElementTree.register_namespace("soap", SOAP_ENV_NS)
ElementTree.register_namespace("xsi", XSI_NS)


@dataclass(frozen=True)
class SoapProperty:
    """One named request parameter.

    ``xsd_type`` is the XML Schema type announced through ``xsi:type``;
    the value itself is always written as text.
    """

    name: str
    value: Any
    xsd_type: str = "string"


class SoapRequestBuilder:
    """Builds SOAP 1.1 envelopes for RPC calls on a single service namespace."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    def build_envelope(self, method: str, properties: Sequence[SoapProperty] = ()) -> bytes:
        """Build a SOAP envelope for a method call.

        Parameters
        ----------
        method : str
            Remote method name, qualified by the service namespace.
        properties : Sequence[SoapProperty]
            Parameters in wire order, written as unqualified child elements.

        Returns
        -------
        bytes
            UTF-8 encoded envelope including the XML declaration.
        """
        envelope = ElementTree.Element(f"{{{SOAP_ENV_NS}}}Envelope")
        # Referenced only from xsi:type values, so ElementTree won't declare it
        envelope.set("xmlns:xsd", XSD_NS)
        ElementTree.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Header")
        body = ElementTree.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")

        request = ElementTree.SubElement(body, f"{{{self.namespace}}}{method}")
        for prop in properties:
            self._serialize_property(request, prop)

        return ElementTree.tostring(envelope, encoding="utf-8", xml_declaration=True)

    def _serialize_property(self, parent: ElementTree.Element, prop: SoapProperty) -> None:
        """Append ``prop`` to ``parent`` as a typed element."""
        elem = ElementTree.SubElement(parent, prop.name)
        if prop.value is None:
            elem.set(f"{{{XSI_NS}}}nil", "true")
            return
        elem.set(f"{{{XSI_NS}}}type", f"xsd:{prop.xsd_type}")
        if isinstance(prop.value, bool):
            elem.text = str(prop.value).lower()
        else:
            elem.text = str(prop.value)
