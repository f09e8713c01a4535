"""SOAP payload builders shared by the tests."""

from unittest.mock import MagicMock

SOAP_NS = "http://schemas.xmlsoap.org/soap/envelope/"


def soap_envelope(body: str) -> str:
    """Wrap ``body`` in a SOAP 1.1 envelope as the service returns it."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<S:Envelope xmlns:S="{SOAP_NS}">'
        f"<S:Body>{body}</S:Body>"
        "</S:Envelope>"
    )


def account_xml(
    id: str | None = "1",
    solde: str | None = "1500.5",
    date_creation: str | None = "2024-03-15",
    type: str | None = "COURANT",
) -> str:
    """One ``<return>`` record; ``None`` leaves the field out."""
    parts = []
    if id is not None:
        parts.append(f"<id>{id}</id>")
    if solde is not None:
        parts.append(f"<solde>{solde}</solde>")
    if date_creation is not None:
        parts.append(f"<dateCreation>{date_creation}</dateCreation>")
    if type is not None:
        parts.append(f"<type>{type}</type>")
    return f"<return>{''.join(parts)}</return>"


def list_response(*records: str) -> str:
    return soap_envelope(
        f'<ns2:getComptesResponse xmlns:ns2="http://ws.soapAcount/">{"".join(records)}</ns2:getComptesResponse>'
    )


def fault_response(faultcode: str = "S:Server", faultstring: str = "Compte introuvable") -> str:
    return soap_envelope(
        "<S:Fault>"
        f"<faultcode>{faultcode}</faultcode>"
        f"<faultstring>{faultstring}</faultstring>"
        "</S:Fault>"
    )


def http_response(text: str, status_code: int = 200, encoding: str = "utf-8") -> MagicMock:
    """Mock of an ``httpx.Response`` carrying ``text`` encoded as ``encoding``."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.content = text.encode(encoding)
    return response
