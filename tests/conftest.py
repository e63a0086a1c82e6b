"""Shared fixtures for the meal catalog tests"""

import pytest

from config.settings import Settings
from mealdb.models import Record


def make_record(record_id, name="", category="", area="", **extra):
    """Build a record the way the client would after a detail lookup"""
    return Record(id=str(record_id), name=name, category=category, area=area, **extra)


def meal_payload(record_id, name, category="", area="", **extra):
    """Raw wire-format meal dict as returned by the API"""
    payload = {
        'idMeal': str(record_id),
        'strMeal': name,
        'strMealThumb': f"https://img.example/{record_id}.jpg",
        'strCategory': category,
        'strArea': area,
        'strInstructions': None,
    }
    payload.update(extra)
    return payload


@pytest.fixture
def settings():
    """Settings with test-friendly limits"""
    return Settings(
        mealdb_base_url="https://test-mealdb.com/api/",
        mealdb_timeout=5,
        aggregate_max_categories=10,
        category_member_limit=5,
        aggregate_max_concurrency=4,
        default_search_term="Arrabiata",
    )
