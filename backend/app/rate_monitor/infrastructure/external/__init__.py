# External clients - ExchangeRate-API

from .exchange_rate_client import ExchangeRateApiClient

__all__ = [
    "ExchangeRateApiClient",
]
