from cybersource_lite.protocol.reason_codes import REASON_CODES, ReasonCode, lookup_reason_code
from cybersource_lite.protocol.request_builder import SoapRequestBuilder, split_name
from cybersource_lite.protocol.response_parser import SoapResponseParser
from cybersource_lite.protocol.services import SERVICE_ELEMENTS, SERVICE_MAP, select_services

__all__ = [
    "REASON_CODES",
    "ReasonCode",
    "SERVICE_ELEMENTS",
    "SERVICE_MAP",
    "SoapRequestBuilder",
    "SoapResponseParser",
    "lookup_reason_code",
    "select_services",
    "split_name",
]
