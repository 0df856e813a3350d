from typing import Literal

from immoauto.schemas.common import CamelModel
from immoauto.schemas.property import PropertyOut
from immoauto.schemas.vehicle import VehicleOut


class SearchResults(CamelModel):
    properties: list[PropertyOut]
    vehicles: list[VehicleOut]


class Suggestion(CamelModel):
    type: Literal["property", "vehicle", "city"]
    id: int | None = None
    label: str
