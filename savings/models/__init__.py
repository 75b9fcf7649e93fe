from .channel import DEPOSIT_MODES, PaymentChannel
from .saving import Saving, TRANSACTION_TYPES, SAVING_STATUS, month_label

__all__ = [
    "DEPOSIT_MODES",
    "PaymentChannel",
    "Saving",
    "TRANSACTION_TYPES",
    "SAVING_STATUS",
    "month_label",
]
