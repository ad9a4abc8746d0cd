from .types import Bounds, TextBlock, TextMatchMode, TextCondition, join_text
from .recognize import ocr
from .engine import get_ocr_engine, reset_ocr_engine
from .reader import TextReader

__all__ = [
    "Bounds",
    "TextBlock",
    "TextMatchMode",
    "TextCondition",
    "join_text",
    "ocr",
    "get_ocr_engine",
    "reset_ocr_engine",
    "TextReader",
]
