from .feature_print import (
    UnableToFeaturePrint,
    compute_feature_print,
    feature_distance,
    reference_print,
)
from .matcher import MatchResult, NO_MATCH, ImageMatcher
from .utils import (
    ImageLike,
    Region,
    Point,
    load_image,
    to_gray,
    image_size,
    crop,
    region_at,
)

__all__ = [
    "UnableToFeaturePrint",
    "compute_feature_print",
    "feature_distance",
    "reference_print",
    "MatchResult",
    "NO_MATCH",
    "ImageMatcher",
    "ImageLike",
    "Region",
    "Point",
    "load_image",
    "to_gray",
    "image_size",
    "crop",
    "region_at",
]
