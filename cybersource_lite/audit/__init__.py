from cybersource_lite.audit.logger import log_event
from cybersource_lite.audit.scrubber import Scrubber, mask_account_number

__all__ = ["Scrubber", "log_event", "mask_account_number"]
