"""PaddleOCR 引擎管理（懒加载单例 + 推理锁）。"""
from __future__ import annotations

import threading
from typing import Tuple

from ...core.config import settings
from ...core.logger import logger

_engine = None
_engine_lock = threading.Lock()
# PaddleOCR predict() 非线程安全，计算池内的并发调用需串行化
_predict_lock = threading.Lock()


def _create_engine():
    from paddleocr import PaddleOCR  # noqa: delay import

    return PaddleOCR(
        use_textline_orientation=False,
        use_doc_orientation_classify=False,
        use_doc_unwarping=False,
        lang=settings.paddle_ocr_lang,
        device="cpu",
    )


def get_ocr_engine():
    """获取 PaddleOCR 单例，首次调用时初始化（双检锁）。"""
    global _engine
    if _engine is not None:
        return _engine

    with _engine_lock:
        if _engine is None:
            logger.info("正在初始化 PaddleOCR (lang={})...", settings.paddle_ocr_lang)
            try:
                _engine = _create_engine()
            except Exception:
                logger.exception("PaddleOCR 初始化失败，请检查 paddleocr / paddlepaddle 依赖")
                raise
            logger.info("PaddleOCR 初始化完成")
    return _engine


def acquire_ocr() -> Tuple[object, threading.Lock]:
    """返回共享引擎及其推理锁。"""
    return get_ocr_engine(), _predict_lock


def reset_ocr_engine() -> None:
    """丢弃已缓存的引擎，下次使用时重新创建（切换识别语言后调用）。"""
    global _engine
    with _engine_lock:
        _engine = None
