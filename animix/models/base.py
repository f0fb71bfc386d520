"""Shared building blocks for provider payload schemas."""

from typing import Annotated, Any, Dict, List, Optional, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict

T = TypeVar("T")


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


# Providers send `null` for empty collections as often as they omit them.
NullableList = Annotated[List[T], BeforeValidator(_none_to_list)]


def _empty_to_dict(value: Any) -> Any:
    return {} if value is None or value == [] else value


# MangaDex serializes an empty localized string map as `[]`.
LocalizedString = Annotated[Dict[str, Optional[str]], BeforeValidator(_empty_to_dict)]


class SourceModel(BaseModel):
    """Base for raw provider records: unknown keys ignored, everything optional."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
