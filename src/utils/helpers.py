"""Utility functions for presenting meal records"""

from mealdb.models import Record

INSTRUCTIONS_PREVIEW_LENGTH = 150


def truncate_text(text: str, max_length: int = INSTRUCTIONS_PREVIEW_LENGTH) -> str:
    """
    Truncate text to specified length with ellipsis

    Args:
        text: Text to truncate
        max_length: Number of characters kept before the ellipsis

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[:max_length] + "..."


def format_results_heading(count: int) -> str:
    """Heading shown above a list of search results"""
    return f"Search Results ({count} meal{'' if count == 1 else 's'} found)"


def format_ingredients_list(record: Record) -> str:
    """
    Format ingredients of a record for display

    Args:
        record: Fully looked-up record

    Returns:
        Numbered "measure ingredient" lines
    """
    if not record.ingredients:
        return "No ingredients listed"

    formatted = []
    for i, ingredient in enumerate(record.ingredients, 1):
        line = f"{ingredient.measure} {ingredient.name}".strip()
        formatted.append(f"{i}. {line}")

    return '\n'.join(formatted)


def summarize_record(record: Record) -> str:
    """Name, category, area and an instructions preview as one block"""
    lines = [
        record.name,
        f"Category: {record.category}",
        f"Area: {record.area}",
    ]
    if record.tag_list:
        lines.append(f"Tags: {', '.join(record.tag_list)}")
    if record.instructions:
        lines.append(truncate_text(record.instructions))
    return '\n'.join(lines)
