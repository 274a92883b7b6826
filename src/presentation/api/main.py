"""FastAPI main application."""

import logging
from datetime import datetime
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...application.services.farm_zone_classifier_service import FarmZoneClassifierService
from ...domain.entities.classification_result import ClassificationResult
from ...domain.entities.farm_zone import FarmZone
from ...domain.entities.historical_record import HistoricalRecord
from ...domain.entities.zone_type import ZoneType
from ...domain.exceptions import FarmZoneError
from ...infrastructure.repositories.csv_farm_profile_repository import CSVFarmProfileRepository
from ...infrastructure.repositories.json_farm_zone_repository import JSONFarmZoneRepository
from config.settings import (
    FARM_PROFILE_FILE,
    FARM_ZONE_FILE,
    DEFAULT_THRESHOLDS,
    FACTOR_WEIGHTS,
    CROP_CONFIGS,
    REGIONAL_ADJUSTMENTS,
    URGENCY_SETTINGS,
    TREND_SETTINGS,
    IMPROVEMENT_STRATEGIES,
    API_SETTINGS,
    LOG_SETTINGS,
)

logging.basicConfig(level=LOG_SETTINGS["level"], format=LOG_SETTINGS["format"])
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=API_SETTINGS["title"],
    description=API_SETTINGS["description"],
    version=API_SETTINGS["version"],
)


@lru_cache
def get_service() -> FarmZoneClassifierService:
    """Build the classifier service from settings."""
    logger.info(f"Using farm profiles from {FARM_PROFILE_FILE}, zones in {FARM_ZONE_FILE}")
    return FarmZoneClassifierService(
        farm_profile_repo=CSVFarmProfileRepository(str(FARM_PROFILE_FILE), create_missing=True),
        farm_zone_repo=JSONFarmZoneRepository(str(FARM_ZONE_FILE)),
        default_thresholds=DEFAULT_THRESHOLDS,
        factor_weights=FACTOR_WEIGHTS,
        crop_configs=CROP_CONFIGS,
        regional_adjustments=REGIONAL_ADJUSTMENTS,
        urgency_settings=URGENCY_SETTINGS,
        trend_settings=TREND_SETTINGS,
        improvement_strategies=IMPROVEMENT_STRATEGIES,
    )


ServiceDep = Annotated[FarmZoneClassifierService, Depends(get_service)]


# Request/Response models
class HistoricalRecordModel(BaseModel):
    """Historical data of a farm, one entry per season."""

    yields: List[Annotated[float, Field(ge=0)]] = Field(
        ..., description="Yield per season in tons/hectare"
    )
    seasons: List[str] = Field(default_factory=list, description="Season labels, e.g. '2021-Wet'")
    soil_quality_scores: List[Annotated[float, Field(ge=0, le=10)]] = Field(
        default_factory=list, description="Soil quality per season (0-10)"
    )
    moisture_levels: List[Annotated[float, Field(ge=0, le=100)]] = Field(
        default_factory=list, description="Moisture level per season (%)"
    )

    def to_entity(self) -> HistoricalRecord:
        return HistoricalRecord(
            yields=list(self.yields),
            seasons=list(self.seasons),
            soil_quality_scores=list(self.soil_quality_scores),
            moisture_levels=list(self.moisture_levels),
        )


class ClassifyRecordRequest(BaseModel):
    """Request model for stateless classification."""

    historical_record: HistoricalRecordModel
    crop_type: Optional[str] = Field(None, description="Crop type (e.g., 'Maize')")
    region: Optional[str] = Field(None, description="Region (e.g., 'Middle Belt')")


class CreateFarmZoneRequest(BaseModel):
    """Request model for creating a farm zone."""

    farm_profile_id: str
    historical_record: HistoricalRecordModel
    average_yield: Optional[float] = Field(None, ge=0)
    productivity_score: Optional[float] = Field(None, ge=0, le=100)


class UpdateFarmZoneRequest(BaseModel):
    """Request model for updating a farm zone."""

    historical_record: Optional[HistoricalRecordModel] = None
    average_yield: Optional[float] = Field(None, ge=0)
    productivity_score: Optional[float] = Field(None, ge=0, le=100)


class ClassifyFarmRequest(BaseModel):
    """Request model for classifying a stored farm profile."""

    farm_profile_id: str
    force_recalculation: bool = False


class BulkClassifyFarmsRequest(BaseModel):
    """Request model for bulk classification."""

    farm_profile_ids: List[str] = Field(..., min_length=1)
    force_recalculation: bool = False


class FactorsResponse(BaseModel):
    yield_consistency: float
    soil_quality: float
    moisture_adequacy: float
    seasonal_performance: float


class ClassificationResponse(BaseModel):
    """Response model for a classification."""

    farm_profile_id: Optional[str] = None
    zone_type: ZoneType
    productivity_score: float
    average_yield: float
    confidence: int
    factors: FactorsResponse
    recommendations: List[str]

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "ClassificationResponse":
        return cls(**result.to_dict())


class HistoricalRecordResponse(BaseModel):
    yields: List[float]
    seasons: List[str]
    soil_quality_scores: List[float]
    moisture_levels: List[float]


class FarmZoneResponse(BaseModel):
    """Response model for a stored farm zone."""

    id: str
    farm_profile_id: str
    zone_type: ZoneType
    historical_record: HistoricalRecordResponse
    average_yield: float
    productivity_score: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_zone(cls, zone: FarmZone) -> "FarmZoneResponse":
        return cls(**zone.to_dict())


class BulkClassificationResponse(BaseModel):
    """Response model for bulk classification."""

    total_processed: int
    successful: int
    failed: int
    results: List[ClassificationResponse]
    errors: List[Dict[str, str]]


class CriticalFarmResponse(BaseModel):
    farm_zone: FarmZoneResponse
    urgency_score: float
    critical_factors: List[str]


class TrendAnalysisResponse(BaseModel):
    yield_trend: str
    soil_trend: str
    moisture_trend: str


class ZonePredictionResponse(BaseModel):
    """Response model for a future zone prediction."""

    current_zone: ZoneType
    predicted_zone: ZoneType
    confidence: int
    timeframe: str
    trend_analysis: TrendAnalysisResponse


class ImprovementStrategiesResponse(BaseModel):
    strategies: List[Dict[str, Any]]
    success_metrics: List[str]


# Error mapping
@app.exception_handler(FarmZoneError)
async def farm_zone_error_handler(request: Request, exc: FarmZoneError) -> JSONResponse:
    status_code = (
        status.HTTP_404_NOT_FOUND if isinstance(exc, LookupError) else status.HTTP_400_BAD_REQUEST
    )
    logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} error: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": API_SETTINGS["title"],
        "version": API_SETTINGS["version"],
        "endpoints": {
            "classify": "/classify",
            "farm_zones": "/farm-zones",
            "statistics": "/farm-zones/statistics",
            "health": "/health",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/classify", response_model=ClassificationResponse)
def classify(request: ClassifyRecordRequest, service: ServiceDep) -> ClassificationResponse:
    """Classify a posted historical record without storing it."""
    result = service.classify_record(
        request.historical_record.to_entity(),
        crop_type=request.crop_type,
        region=request.region,
    )
    return ClassificationResponse.from_result(result)


@app.post(
    "/farm-zones", response_model=FarmZoneResponse, status_code=status.HTTP_201_CREATED
)
def create_farm_zone(request: CreateFarmZoneRequest, service: ServiceDep) -> FarmZoneResponse:
    """Create the zone classification of a farm profile."""
    zone = service.create(
        request.farm_profile_id,
        request.historical_record.to_entity(),
        average_yield=request.average_yield,
        productivity_score=request.productivity_score,
    )
    return FarmZoneResponse.from_zone(zone)


@app.get("/farm-zones", response_model=List[FarmZoneResponse])
def list_farm_zones(service: ServiceDep, zone_type: Optional[ZoneType] = None):
    """List farm zones, optionally filtered by zone type."""
    return [FarmZoneResponse.from_zone(z) for z in service.find_all(zone_type)]


@app.get("/farm-zones/statistics", response_model=Dict[str, int])
def get_statistics(service: ServiceDep):
    """Count farms per productivity zone."""
    return {zone_type.value: count for zone_type, count in service.get_zone_statistics().items()}


@app.get("/farm-zones/analytics")
def get_detailed_analytics(service: ServiceDep) -> Dict[str, Any]:
    """Zone distribution, average scores, performance metrics and crop breakdown."""
    return service.get_detailed_analytics()


@app.get("/farm-zones/critical-farms", response_model=List[CriticalFarmResponse])
def get_critical_farms(service: ServiceDep):
    """Low-yield farms ranked by urgency."""
    return [CriticalFarmResponse(**c.to_dict()) for c in service.get_critical_farms()]


@app.get(
    "/farm-zones/improvement-strategies/{zone_type}",
    response_model=ImprovementStrategiesResponse,
)
def get_improvement_strategies(zone_type: ZoneType, service: ServiceDep):
    """Improvement strategies and success metrics for a zone type."""
    return service.get_improvement_strategies(zone_type)


@app.get("/farm-zones/predict/{farm_profile_id}", response_model=ZonePredictionResponse)
def predict_future_classification(farm_profile_id: str, service: ServiceDep):
    """Project the zone of a farm from its historical trends."""
    return service.predict_future_classification(farm_profile_id).to_dict()


@app.get("/farm-zones/farm-profile/{farm_profile_id}")
def get_by_farm_profile(farm_profile_id: str, service: ServiceDep):
    """Get the farm zone of a farm profile."""
    zone = service.find_by_farm_profile(farm_profile_id)
    if zone is None:
        return {"message": "No farm zone classification found for this farm profile"}
    return FarmZoneResponse.from_zone(zone)


@app.post("/farm-zones/classify", response_model=ClassificationResponse)
def classify_farm(request: ClassifyFarmRequest, service: ServiceDep) -> ClassificationResponse:
    """Classify a stored farm profile into a productivity zone."""
    result = service.classify_farm(
        request.farm_profile_id, force_recalculation=request.force_recalculation
    )
    return ClassificationResponse.from_result(result)


@app.post("/farm-zones/classify/bulk", response_model=BulkClassificationResponse)
def bulk_classify_farms(request: BulkClassifyFarmsRequest, service: ServiceDep):
    """Classify several farm profiles; failures are reported per farm."""
    summary = service.bulk_classify_farms(
        request.farm_profile_ids, force_recalculation=request.force_recalculation
    )
    return summary.to_dict()


@app.get("/farm-zones/{zone_id}", response_model=FarmZoneResponse)
def get_farm_zone(zone_id: str, service: ServiceDep) -> FarmZoneResponse:
    """Get a farm zone by id."""
    return FarmZoneResponse.from_zone(service.find_one(zone_id))


@app.patch("/farm-zones/{zone_id}", response_model=FarmZoneResponse)
def update_farm_zone(
    zone_id: str, request: UpdateFarmZoneRequest, service: ServiceDep
) -> FarmZoneResponse:
    """Update a farm zone and reclassify it."""
    zone = service.update(
        zone_id,
        historical_record=(
            request.historical_record.to_entity() if request.historical_record else None
        ),
        average_yield=request.average_yield,
        productivity_score=request.productivity_score,
    )
    return FarmZoneResponse.from_zone(zone)


@app.delete("/farm-zones/{zone_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_farm_zone(zone_id: str, service: ServiceDep) -> Response:
    """Delete a farm zone."""
    service.remove(zone_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
