"""Electroneum vendor client: ETN conversion, payment tokens and signatures."""

from .domain.constants import API_VERSION
from .domain.errors import ErrorKind, VendorError
from .vendor import PaymentVendor

__all__ = ["API_VERSION", "ErrorKind", "PaymentVendor", "VendorError"]
