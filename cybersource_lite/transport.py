"""
HTTPS transport for SOAP documents.

One POST per call, fixed headers, no retry. HTTP status codes are not
interpreted here: the vendor puts meaningful fault bodies in 500 responses,
so every answer goes back to the response parser. Only failing to get an
answer at all raises.
"""

import logging
from typing import Optional

import httpx

from cybersource_lite.errors import TransportError
from cybersource_lite.models.transaction import RawResponse
from cybersource_lite.protocol.request_builder import TRANSACTION_NS

logger = logging.getLogger("cybersource_lite.transport")

SOAP_HEADERS = {
    "Accept": "text/xml",
    "Content-Type": "text/xml; charset=utf-8",
    "SOAPAction": f"{TRANSACTION_NS}#requestMessage",
}


class SoapTransport:
    """Posts one SOAP document and returns the raw answer."""

    def __init__(
        self,
        url: str,
        verify: bool = True,
        http_transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url
        self.verify = verify
        self._http_transport = http_transport

    def send(self, document: str) -> RawResponse:
        """
        POST the document.

        Raises:
            TransportError: Connection refused, DNS failure, TLS failure, timeout.
        """
        try:
            with httpx.Client(verify=self.verify, transport=self._http_transport) as client:
                response = client.post(self.url, content=document.encode("utf-8"), headers=SOAP_HEADERS)
        except httpx.RequestError as e:
            logger.error("Request to %s failed: %s", self.url, e)
            raise TransportError(f"Could not reach {self.url}: {e}", url=self.url) from e

        logger.debug("POST %s -> HTTP %d (%d bytes)", self.url, response.status_code, len(response.content))
        return RawResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )
