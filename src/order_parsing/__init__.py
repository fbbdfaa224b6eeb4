"""
Order Parsing: извлечение канонического транспортного заказа
из строк букинга партнёра.

Пример:
    from src.order_parsing import FormatDispatcher

    order = FormatDispatcher.from_config().dispatch(lines, "booking.pdf")
    payload = order.to_payload()
"""

from .assistants import FormatExtractor, TransallianceAssistant, ZieglerAssistant, get_assistant
from .dispatcher import FormatDispatcher
from .infrastructure import JsonOrderRepository

__all__ = [
    "FormatDispatcher",
    "FormatExtractor",
    "TransallianceAssistant",
    "ZieglerAssistant",
    "get_assistant",
    "JsonOrderRepository",
]
