"""
Review analytics: star histogram and keyword tags from review bodies.

The tag extractor is a frequency heuristic, not NLP. Its stop words,
minimum count and cap are fixed so output stays comparable across runs.
"""
import math
import re
from typing import Any, Dict, List, Optional

from places_scraper.models.places import ReviewsDistribution, ReviewTag


STOP_WORDS = frozenset([
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "is", "was", "are", "were", "be", "been", "have", "has", "had", "do", "does",
    "did", "will", "would", "could", "should", "may", "might", "can", "must",
    "shall", "this", "that", "these", "those", "i", "you", "he", "she", "it",
    "we", "they", "me", "him", "her", "us", "them", "my", "your", "his", "its",
    "our", "their", "a", "an",
])

MIN_TAG_LENGTH = 3
MIN_TAG_COUNT = 2
MAX_TAGS = 10

_STAR_BUCKETS = {
    1: "one_star",
    2: "two_star",
    3: "three_star",
    4: "four_star",
    5: "five_star",
}

_PUNCTUATION_RE = re.compile(r"[^\w\s]")


def _review_rating(review: Dict[str, Any]) -> float:
    rating = review.get("rating")
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        return 0
    if math.isnan(rating) or math.isinf(rating):
        return 0
    return rating


def _review_text(review: Dict[str, Any]) -> str:
    text = review.get("text")
    if isinstance(text, dict):
        body = text.get("text")
        return body if isinstance(body, str) else ""
    return ""


def calculate_reviews_distribution(reviews: Optional[List[Dict[str, Any]]]) -> ReviewsDistribution:
    """Floor each rating and count it in its 1-5 bucket. Out-of-range ratings are dropped."""
    counts = {bucket: 0 for bucket in _STAR_BUCKETS.values()}
    if not reviews or not isinstance(reviews, list):
        return ReviewsDistribution(**counts)

    for review in reviews:
        if not isinstance(review, dict):
            continue
        bucket = _STAR_BUCKETS.get(math.floor(_review_rating(review)))
        if bucket:
            counts[bucket] += 1

    return ReviewsDistribution(**counts)


def extract_reviews_tags(reviews: Optional[List[Dict[str, Any]]]) -> List[ReviewTag]:
    """
    Extract the most frequent meaningful words from review bodies.

    Tokens shorter than three characters and stop words are discarded; only
    words seen at least twice are kept. Ties keep first-encountered order.
    """
    if not reviews or not isinstance(reviews, list):
        return []

    word_counts: Dict[str, int] = {}
    for review in reviews:
        if not isinstance(review, dict):
            continue
        text = _PUNCTUATION_RE.sub(" ", _review_text(review).lower())
        for word in text.split():
            if len(word) < MIN_TAG_LENGTH or word in STOP_WORDS:
                continue
            word_counts[word] = word_counts.get(word, 0) + 1

    frequent = [(word, count) for word, count in word_counts.items() if count >= MIN_TAG_COUNT]
    frequent.sort(key=lambda item: item[1], reverse=True)

    return [ReviewTag(title=word, count=count) for word, count in frequent[:MAX_TAGS]]
