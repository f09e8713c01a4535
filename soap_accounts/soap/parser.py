"""SOAP 1.1 response parsing.

Responses are decoded into a small property tree: every child element of
the response object becomes a named property whose value is either a
nested :class:`SoapObject` (element with children), a string (leaf
element) or ``None`` (``xsi:nil`` leaf).
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Union
from xml.etree import ElementTree

from soap_accounts.exceptions import ResponseFormatError, SoapFaultError
from soap_accounts.soap.envelope import XSI_NS

logger = logging.getLogger(__name__)

SoapValue = Union["SoapObject", str, None]


@dataclass
class SoapObject:
    """Structured value decoded from a response element."""

    name: str
    properties: list[tuple[str, SoapValue]] = field(default_factory=list)

    @property
    def property_count(self) -> int:
        return len(self.properties)

    def has_property(self, name: str) -> bool:
        return any(key == name for key, _ in self.properties)

    def get_property(self, name: str) -> SoapValue:
        """Return the first property called ``name``.

        Raises
        ------
        KeyError
            If the object has no such property.
        """
        for key, value in self.properties:
            if key == name:
                return value
        raise KeyError(name)

    def get_text(self, name: str) -> str | None:
        """Return a leaf property as text; ``None`` if absent, nil or structured."""
        if not self.has_property(name):
            return None
        value = self.get_property(name)
        return value if isinstance(value, str) else None

    def __iter__(self) -> Iterator[SoapValue]:
        return (value for _, value in self.properties)


class SoapResponseParser:
    """Parses SOAP 1.1 response envelopes.

    Attributes:
        max_depth: Maximum nesting depth accepted inside the response object.
    """

    def __init__(self, max_depth: int = 10) -> None:
        self.max_depth = max_depth

    def parse(self, xml_text: str | bytes) -> SoapObject | None:
        """Decode the response object of an envelope.

        Returns
        -------
        SoapObject | None
            The first element inside ``Body``, or ``None`` for an empty body.

        Raises
        ------
        SoapFaultError
            If the body carries a SOAP fault.
        ResponseFormatError
            If the payload is not a well-formed SOAP envelope.
        """
        try:
            root = ElementTree.fromstring(xml_text)
        except ElementTree.ParseError as e:
            logger.error("Error parsing SOAP XML: %s", e)
            raise ResponseFormatError(f"Malformed SOAP response: {e}") from e

        if self._local_tag(root.tag) != "Envelope":
            raise ResponseFormatError(f"Expected SOAP Envelope, got <{self._local_tag(root.tag)}>")

        body = self._find_child(root, "Body")
        if body is None:
            raise ResponseFormatError("SOAP Envelope has no Body")

        fault = self._find_child(body, "Fault")
        if fault is not None:
            raise self._build_fault(fault)

        children = list(body)
        if not children:
            return None
        return self._element_to_object(children[0], 0)

    @classmethod
    def is_fault(cls, xml_text: str | bytes) -> bool:
        """Whether ``xml_text`` is a SOAP envelope whose Body holds a Fault."""
        try:
            root = ElementTree.fromstring(xml_text)
        except ElementTree.ParseError:
            return False
        if cls._local_tag(root.tag) != "Envelope":
            return False
        body = cls._find_child(root, "Body")
        return body is not None and cls._find_child(body, "Fault") is not None

    def _element_to_object(self, elem: ElementTree.Element, depth: int) -> SoapObject:
        if depth >= self.max_depth:
            raise ResponseFormatError(
                f"Response nesting exceeds {self.max_depth} levels at <{self._local_tag(elem.tag)}>"
            )

        obj = SoapObject(name=self._local_tag(elem.tag))
        for child in elem:
            tag = self._local_tag(child.tag)
            if len(child) > 0:
                obj.properties.append((tag, self._element_to_object(child, depth + 1)))
            elif child.get(f"{{{XSI_NS}}}nil") in ("true", "1"):
                obj.properties.append((tag, None))
            else:
                obj.properties.append((tag, child.text or ""))
        return obj

    def _build_fault(self, fault: ElementTree.Element) -> SoapFaultError:
        faultcode = self._child_text(fault, "faultcode") or "Server"
        faultstring = self._child_text(fault, "faultstring") or ""
        detail_elem = self._find_child(fault, "detail")
        detail = None
        if detail_elem is not None:
            detail = "".join(detail_elem.itertext()).strip() or None
        logger.warning("SOAP fault %s: %s", faultcode, faultstring)
        return SoapFaultError(faultcode, faultstring, detail)

    @classmethod
    def _find_child(cls, elem: ElementTree.Element, name: str) -> ElementTree.Element | None:
        for child in elem:
            if cls._local_tag(child.tag) == name:
                return child
        return None

    def _child_text(self, elem: ElementTree.Element, name: str) -> str | None:
        child = self._find_child(elem, name)
        return child.text if child is not None else None

    @staticmethod
    def _local_tag(tag: str) -> str:
        """Strip the ``{namespace}`` prefix from a qualified tag."""
        return tag.split("}")[-1] if "}" in tag else tag
