"""
Исключения домена Order Parsing.

Ядро извлечения не бросает исключений на плохих документах.
Эти ошибки возникают только на границах: загрузка дескрипторов форматов,
выбор формата диспетчером и передача заказа в хранилище.
"""


class ParsingError(Exception):
    """Базовое исключение извлечения заказов."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Order Parsing Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class FormatConfigurationError(ParsingError):
    """Некорректный YAML-дескриптор формата."""
    pass


class FormatNotFoundError(FormatConfigurationError):
    """Дескриптор формата не найден."""
    pass


class UnknownFormatError(ParsingError):
    """Ни один формат не распознал документ."""
    pass


class OrderWriteError(ParsingError):
    """Ошибка передачи заказа в хранилище."""
    pass


class OrderFileNotFoundError(ParsingError):
    """Файл сохранённого заказа не найден."""
    pass
