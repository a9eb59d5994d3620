"""Data product construction."""

from restohub.products.builder import (
    PRODUCT_TEMPLATES,
    DataProductBuilder,
    ProductTemplate,
    merge_policy,
    parse_product_type,
)

__all__ = [
    "PRODUCT_TEMPLATES",
    "DataProductBuilder",
    "ProductTemplate",
    "merge_policy",
    "parse_product_type",
]
