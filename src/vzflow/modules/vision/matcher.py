"""
Image detection by feature-print distance.

Features:
- Reference print computed once per reference path (cached)
- Region given explicitly or as a top-left point plus the reference size
- Reference failures raise UnableToFeaturePrint; a blank or out-of-frame
  live region is reported as "no match"
"""
from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from ...core.config import settings
from ...core.logger import logger
from ...core.thread_pool import run_in_compute
from .feature_print import compute_feature_print, feature_distance, reference_print
from .utils import ImageLike, Point, Region, crop, image_size, load_image, region_at


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    distance: float

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = MatchResult(matched=False, distance=math.inf)


class ImageMatcher:
    def __init__(
        self,
        *,
        threshold: Optional[float] = None,
        print_size: Optional[int] = None,
    ) -> None:
        self.threshold = settings.image_match_threshold if threshold is None else float(threshold)
        self.print_size = print_size or settings.feature_print_size
        self._reference_cache: Dict[str, np.ndarray] = {}

    def reference(self, reference: ImageLike) -> np.ndarray:
        """Feature print of a reference image (cached for paths)."""
        if isinstance(reference, str):
            fp = self._reference_cache.get(reference)
            if fp is None:
                fp = reference_print(reference, size=self.print_size)
                self._reference_cache[reference] = fp
            return fp
        return reference_print(reference, size=self.print_size)

    @staticmethod
    def region_for(reference: ImageLike, point: Point) -> Region:
        """Region at ``point`` sized like the reference image."""
        return region_at(point, image_size(reference))

    def match(
        self,
        frame: ImageLike,
        region: Region,
        reference: ImageLike,
        *,
        threshold: Optional[float] = None,
        ref_print: Optional[np.ndarray] = None,
    ) -> MatchResult:
        """Compare ``reference`` against ``frame`` cropped to ``region``.

        ``ref_print`` skips recomputing the reference print when the caller
        already holds it (see ``reference()``).

        Raises:
            UnableToFeaturePrint: the reference image has no usable print
        """
        thr = self.threshold if threshold is None else float(threshold)
        if ref_print is None:
            ref_print = self.reference(reference)

        live = crop(load_image(frame), region)
        if live is None:
            logger.debug("检测区域越界，视为未匹配: region={}", region)
            return NO_MATCH
        live_print = compute_feature_print(live, size=self.print_size)
        if live_print is None:
            return NO_MATCH

        distance = feature_distance(live_print, ref_print)
        return MatchResult(matched=distance < thr, distance=distance)

    def matches(
        self,
        frame: ImageLike,
        region: Region,
        reference: ImageLike,
        threshold: Optional[float] = None,
        *,
        ref_print: Optional[np.ndarray] = None,
    ) -> bool:
        return self.match(frame, region, reference, threshold=threshold, ref_print=ref_print).matched

    def match_at(
        self,
        frame: ImageLike,
        point: Point,
        reference: ImageLike,
        *,
        threshold: Optional[float] = None,
    ) -> MatchResult:
        return self.match(frame, self.region_for(reference, point), reference, threshold=threshold)

    async def async_match(
        self,
        frame: ImageLike,
        region: Region,
        reference: ImageLike,
        *,
        threshold: Optional[float] = None,
        ref_print: Optional[np.ndarray] = None,
    ) -> MatchResult:
        """异步版本的 match()，在计算线程池中执行。"""
        return await run_in_compute(
            functools.partial(
                self.match, frame, region, reference, threshold=threshold, ref_print=ref_print
            )
        )

    async def async_matches(
        self,
        frame: ImageLike,
        region: Region,
        reference: ImageLike,
        threshold: Optional[float] = None,
        *,
        ref_print: Optional[np.ndarray] = None,
    ) -> bool:
        result = await self.async_match(frame, region, reference, threshold=threshold, ref_print=ref_print)
        return result.matched


__all__ = ["MatchResult", "NO_MATCH", "ImageMatcher"]
