"""Pydantic response models for the station API. Field aliases keep the public JSON keys."""

from pydantic import BaseModel, ConfigDict, Field


class StationResponse(BaseModel):
    id: str
    name: str


class ScheduleResponse(BaseModel):
    station: str
    time: str


class EstimateResponse(BaseModel):
    station: str
    fare: str
    time: str


class StationEstimateResponse(BaseModel):
    station: str
    estimates: list[EstimateResponse]


class FacilityResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    facility_type: str = Field(alias="jenis_fasilitas")
    image: str = Field(alias="cover")


class StationFacilityResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    station: str
    facilities: list[FacilityResponse] = Field(alias="Facilities")
