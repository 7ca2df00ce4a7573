from __future__ import annotations

from typing import List

from pydantic import BaseModel


class SourceFiltersModel(BaseModel):
    filter_column: str = "Strata"
    filter_value: str = "Total"
    label_column: str = "Year"
    data_column: str = "Percent"


class ViewOptionModel(BaseModel):
    value: str
    label: str
    title: str


class MetaViewsResponse(BaseModel):
    views: List[ViewOptionModel]


class MetaListResponse(BaseModel):
    values: List[str]
