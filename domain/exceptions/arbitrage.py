class ArbitrageException(Exception):
    pass


class SourceUnavailableError(ArbitrageException):
    pass


class ConversionUnavailableError(ArbitrageException):
    pass


class InvalidInputError(ArbitrageException):
    pass


class CacheError(ArbitrageException):
    pass


class TelegramError(ArbitrageException):
    pass
