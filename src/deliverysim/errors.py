from __future__ import annotations


class DeliverySimError(Exception):
    pass


class ConfigError(DeliverySimError):
    pass


class DataError(DeliverySimError):
    pass
