"""Data models for MealDB records"""

from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

# TheMealDB flattens ingredients into strIngredient1..20 / strMeasure1..20
MAX_INGREDIENTS = 20


class Ingredient(BaseModel):
    """One ingredient/measure pair of a record"""
    model_config = ConfigDict(frozen=True)

    name: str
    measure: str = ""


class Record(BaseModel):
    """A single meal as served by the catalog API.

    Records are immutable once fetched; the engine only filters and
    reorders references to them. Summary endpoints (filter by category)
    only fill ``id``, ``name`` and ``thumbnail``; every other field then
    stays an empty string.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="idMeal", description="Unique meal identifier")
    name: str = Field("", alias="strMeal")
    thumbnail: str = Field("", alias="strMealThumb")
    category: str = Field("", alias="strCategory")
    area: str = Field("", alias="strArea")
    instructions: str = Field("", alias="strInstructions")
    tags: str = Field("", alias="strTags")
    youtube: str = Field("", alias="strYoutube")
    source: str = Field("", alias="strSource")
    ingredients: Tuple[Ingredient, ...] = Field(default_factory=tuple)

    @model_validator(mode="before")
    @classmethod
    def _normalize_wire_fields(cls, data: Any) -> Any:
        """Turn nulls into empty strings and collect indexed ingredient pairs"""
        if not isinstance(data, dict):
            return data

        data = {key: ("" if value is None else value) for key, value in data.items()}

        if "ingredients" not in data:
            pairs = []
            for index in range(1, MAX_INGREDIENTS + 1):
                name = str(data.pop(f"strIngredient{index}", "") or "").strip()
                measure = str(data.pop(f"strMeasure{index}", "") or "").strip()
                if name:
                    pairs.append({"name": name, "measure": measure})
            data["ingredients"] = pairs

        if "idMeal" in data:
            data["idMeal"] = str(data["idMeal"])
        return data

    @property
    def tag_list(self) -> List[str]:
        """Tags as list from the comma-separated wire string"""
        return [tag.strip() for tag in self.tags.split(',') if tag.strip()]
