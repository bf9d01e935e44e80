"""Normalization and analytics utilities for Google Places records."""

from places_scraper.utils.normalizers import filter_by_categories, normalize_place

__all__ = ["filter_by_categories", "normalize_place"]
