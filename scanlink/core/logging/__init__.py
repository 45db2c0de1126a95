from .payloads import qrcode_to_loggable

__all__ = ["qrcode_to_loggable"]
