# path: skate-spot-api/app/api/routes/spots.py

from __future__ import annotations

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from app.models.spot_models import DIFFICULTIES, SORT_FIELDS, SPOT_CATEGORIES, Coordinate
from app.utils.geo import distance_meters, meters_to_miles

router = APIRouter(prefix="/spots", tags=["spots"])


class CatalogResponse(BaseModel):
    difficulties: List[str]
    categories: List[str]
    sort_fields: List[str]


class DistanceRequest(BaseModel):
    a: Coordinate
    b: Coordinate


class DistanceResponse(BaseModel):
    distance_m: float
    distance_mi: float


@router.get("/catalog", response_model=CatalogResponse)
def get_catalog() -> CatalogResponse:
    return CatalogResponse(
        difficulties=list(DIFFICULTIES),
        categories=list(SPOT_CATEGORIES),
        sort_fields=list(SORT_FIELDS),
    )


@router.post("/distance", response_model=DistanceResponse)
def get_distance(body: DistanceRequest) -> DistanceResponse:
    d = distance_meters(body.a, body.b)
    return DistanceResponse(distance_m=d, distance_mi=meters_to_miles(d))
