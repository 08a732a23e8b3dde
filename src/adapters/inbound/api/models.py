"""Pydantic models for API responses."""

from pydantic import BaseModel, ConfigDict, Field


class TotalsModel(BaseModel):
    """Summed metrics over the window."""

    page_views: int = Field(0, ge=0, alias="pageViews", description="Total page views")
    unique_visitors: int = Field(
        0, ge=0, alias="uniqueVisitors", description="Daily unique visitors, summed"
    )
    requests: int = Field(0, ge=0, description="Total HTTP requests")

    model_config = ConfigDict(populate_by_name=True)


class CountryModel(BaseModel):
    """A ranked country row."""

    country: str = Field(..., description="ISO country code or 'Unknown'")
    page_views: int = Field(..., ge=0, alias="pageViews")
    requests: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100, description="Share of country page views")

    model_config = ConfigDict(populate_by_name=True)


class DailyPointModel(BaseModel):
    """One day of the timeseries."""

    date: str
    page_views: int = Field(..., alias="pageViews")
    unique_visitors: int = Field(..., alias="uniqueVisitors")
    requests: int

    model_config = ConfigDict(populate_by_name=True)


class SeriesModel(BaseModel):
    """Timeseries wrapper."""

    timeseries: list[DailyPointModel] = Field(default_factory=list)


class PeriodModel(BaseModel):
    """Queried window, inclusive on both ends."""

    since: str
    until: str


class AnalyticsResponse(BaseModel):
    """Response body of GET /api/analytics.

    ``totals`` and ``countryMap`` are present on every path.

    Example:
        {
            "kind": "mock",
            "isMockData": true,
            "totals": {"pageViews": 12847, "uniqueVisitors": 4823, "requests": 35621},
            "countryMap": [{"country": "CN", "pageViews": 5234, ...}, ...]
        }
    """

    kind: str = Field(..., description="mock, real or error")
    is_mock_data: bool = Field(False, alias="isMockData")
    is_real_data: bool = Field(False, alias="isRealData")
    message: str
    error: str | None = Field(None, description="Upstream error message (error path only)")
    totals: TotalsModel
    country_map: list[CountryModel] = Field(default_factory=list, alias="countryMap")
    series: SeriesModel = Field(default_factory=SeriesModel)
    period: PeriodModel | None = None
    has_token: bool = Field(False, alias="hasToken")
    has_zone_id: bool = Field(False, alias="hasZoneId")
    zone_id_value: str = Field("not set", alias="zoneIdValue")

    model_config = ConfigDict(populate_by_name=True)


class PingData(BaseModel):
    """Static figures returned by the ping endpoint."""

    page_views: int = Field(..., alias="pageViews")
    unique_visitors: int = Field(..., alias="uniqueVisitors")
    countries: int

    model_config = ConfigDict(populate_by_name=True)


class PingResponse(BaseModel):
    """Response body of GET /api/test."""

    message: str
    timestamp: str
    data: PingData


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    analytics: str = Field(..., description="'configured' or 'mock'")

