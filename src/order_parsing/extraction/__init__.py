"""
Extraction модуль: атомарные элементы извлечения полей из текста заказа.

Экспортирует нормализаторы значений и экстракторы полей для стадий пайплайна.
"""

from .cascade import first_match, match_one, pattern_strategy
from .money_parser import MoneyParser, CurrencyDetector
from .date_parser import DateParser, DateResult
from .time_window_parser import TimeWindowParser
from .address_extractor import AddressExtractor
from .company_extractor import CompanyExtractor
from .reference_extractor import ReferenceExtractor
from .commercial_extractor import CommercialExtractor, INCOTERMS
from .cargo_extractor import CargoExtractor
from .weight_extractor import WeightExtractor
from .notes_extractor import NotesExtractor
from .customer_extractor import CustomerExtractor
from .comment_extractor import CommentExtractor

__all__ = [
    "first_match",
    "match_one",
    "pattern_strategy",
    "MoneyParser",
    "CurrencyDetector",
    "DateParser",
    "DateResult",
    "TimeWindowParser",
    "AddressExtractor",
    "CompanyExtractor",
    "ReferenceExtractor",
    "CommercialExtractor",
    "INCOTERMS",
    "CargoExtractor",
    "WeightExtractor",
    "NotesExtractor",
    "CustomerExtractor",
    "CommentExtractor",
]
