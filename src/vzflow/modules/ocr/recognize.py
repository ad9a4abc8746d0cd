"""核心 OCR 识别函数。"""
from __future__ import annotations

import threading
from typing import List, Optional, Tuple

import numpy as np

from ..vision.utils import ImageLike, Region, crop, load_image
from .engine import acquire_ocr
from .types import TextBlock


def _normalize_poly(
    poly,
    offset: Tuple[int, int],
    frame_size: Tuple[int, int],
) -> Tuple[float, float, float, float]:
    """将多边形坐标（裁剪图坐标）转换为整帧归一化矩形。"""
    pts = np.asarray(poly, dtype=np.float32).reshape(-1, 2)
    fw, fh = frame_size
    xs = (pts[:, 0] + offset[0]) / fw
    ys = (pts[:, 1] + offset[1]) / fh
    x0, x1 = float(np.clip(xs.min(), 0, 1)), float(np.clip(xs.max(), 0, 1))
    y0, y1 = float(np.clip(ys.min(), 0, 1)), float(np.clip(ys.max(), 0, 1))
    return (x0, y0, x1 - x0, y1 - y0)


def ocr(
    image: ImageLike,
    *,
    roi: Optional[Region] = None,
    min_confidence: float = 0.5,
    engine: Optional[object] = None,
    lock: Optional[threading.Lock] = None,
) -> List[TextBlock]:
    """对图像执行 OCR 识别。

    Args:
        image: 图像来源（路径 / bytes / np.ndarray / Frame）
        roi: 可选区域 (x, y, w, h)，仅识别该区域内的文字
        min_confidence: 最低置信度阈值，低于此值的结果将被过滤
        engine: 可选 OCR 引擎（需提供 predict()），默认使用共享单例

    Returns:
        文字块列表，文本为小写，边界框相对整帧归一化
    """
    if engine is None:
        engine, lock = acquire_ocr()
    img = load_image(image)
    h, w = img.shape[:2]

    offset = (0, 0)
    if roi:
        cropped = crop(img, roi)
        if cropped is None:
            return []
        img = cropped
        offset = (int(roi[0]), int(roi[1]))

    # PaddleOCR 3.x: predict() 接受 BGR ndarray，返回 OCRResult 列表
    if lock is not None:
        with lock:
            results = engine.predict(img)
    else:
        results = engine.predict(img)

    blocks: List[TextBlock] = []
    if results:
        result = results[0]
        rec_texts = result["rec_texts"]
        rec_scores = result["rec_scores"]
        rec_polys = result["rec_polys"]
        for text, confidence, poly in zip(rec_texts, rec_scores, rec_polys):
            if confidence < min_confidence:
                continue
            blocks.append(TextBlock(
                string=str(text).lower(),
                bounds=_normalize_poly(poly, offset, (w, h)),
            ))

    return blocks
