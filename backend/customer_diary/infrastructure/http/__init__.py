from .concerns import (
    DIARY_FIELDS,
    FOLLOWUP_COMPOSER,
    PRODUCT_LINES,
    DiaryFieldsConcern,
    FollowupComposerConcern,
    ProductLinesConcern,
    normalize_products,
)
from .diary_api_client import DiaryApiClient

__all__ = [
    "DIARY_FIELDS",
    "FOLLOWUP_COMPOSER",
    "PRODUCT_LINES",
    "DiaryApiClient",
    "DiaryFieldsConcern",
    "FollowupComposerConcern",
    "ProductLinesConcern",
    "normalize_products",
]
