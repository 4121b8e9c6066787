# path: taxi-route-api/taxiroute/models/route_models.py

from __future__ import annotations

from datetime import datetime, timezone
import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # JSON on the wire and on disk is camelCase (snappedPath, pointAName, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinate(CamelModel):
    lat: float
    lng: float

    @field_validator("lat", "lng")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("coordinate must be finite")
        return v

    @model_validator(mode="after")
    def validate_range(self):
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"lat out of range [-90,90]: {self.lat}")
        if not (-180.0 <= self.lng <= 180.0):
            raise ValueError(f"lng out of range [-180,180]: {self.lng}")
        return self


class Fare(CamelModel):
    min: Optional[float] = Field(default=None, ge=0)
    max: Optional[float] = Field(default=None, ge=0)
    currency: str = "ZAR"

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("fare min must not exceed fare max")
        return self


class Stop(CamelModel):
    name: str = Field(default="", max_length=120)
    lat: float
    lng: float


class RegionLabel(CamelModel):
    province: str = ""
    city: str = ""


class RouteIn(CamelModel):
    """What a contributor submits; geometry is sanitized server side."""

    name: Optional[str] = Field(default=None, max_length=120)
    point_a_name: Optional[str] = Field(default=None, max_length=120)
    point_b_name: Optional[str] = Field(default=None, max_length=120)
    notes: Optional[str] = None
    fare: Optional[Fare] = None
    gesture: Optional[str] = None
    stops: List[Stop] = Field(default_factory=list)
    frequency_per_hour: Optional[float] = Field(default=None, ge=0)
    path: List[Coordinate] = Field(default_factory=list)
    snapped_path: List[Coordinate] = Field(default_factory=list)
    province: str = ""
    city: str = ""


class StoredRoute(RouteIn):
    route_id: int = Field(ge=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = None


class PathRequest(CamelModel):
    path: List[Coordinate]


class SnapResponse(CamelModel):
    snapped_path: List[Coordinate]
    point_count: int = Field(ge=0)

    @model_validator(mode="after")
    def validate_point_count(self):
        if self.point_count != len(self.snapped_path):
            raise ValueError("point_count must equal len(snapped_path)")
        return self


class ConfigResponse(CamelModel):
    maps_api_key: str
