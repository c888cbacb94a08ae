from cybersource_lite.providers.base import PaymentGateway
from cybersource_lite.providers.cybersource import CyberSourceLiteGateway

__all__ = ["CyberSourceLiteGateway", "PaymentGateway"]
