"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from wagemap.classification.models import ColorPalette
from wagemap.geography.normalize import normalize_county_name
from wagemap.rendering.models import FitPadding


class ServiceMode(str, Enum):
    """Where wage areas are looked up."""

    STATIC = "static"
    HTTP = "http"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class DataConfig(BaseModel):
    """Location of the precomputed reference artifacts."""

    data_dir: Path = Field(Path("data"), description="Directory holding the JSON artifacts")
    county_mapping_file: str = Field("county-mapping.json", min_length=1)
    wages_file: str = Field("wages.json", min_length=1)
    job_categories_file: str = Field("soc-codes.json", min_length=1)
    counties_geojson: Optional[str] = Field(
        None, description="County polygons used for fit-to-bounds outside a live map"
    )

    @property
    def county_mapping_path(self) -> Path:
        return self.data_dir / self.county_mapping_file

    @property
    def wages_path(self) -> Path:
        return self.data_dir / self.wages_file

    @property
    def job_categories_path(self) -> Path:
        return self.data_dir / self.job_categories_file

    @property
    def counties_geojson_path(self) -> Optional[Path]:
        return self.data_dir / self.counties_geojson if self.counties_geojson else None


class WageServiceConfig(BaseModel):
    """Wage lookup service settings."""

    mode: ServiceMode = Field(ServiceMode.STATIC, description="static (JSON artifact) or http")
    base_url: Optional[str] = Field(None, description="Wages endpoint for http mode")
    request_timeout: int = Field(15, ge=1, le=120, description="HTTP timeout in seconds")
    user_agent: str = Field("WageMap/0.1", min_length=1)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = v.strip()
        if not stripped:
            return None
        if not stripped.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return stripped

    @model_validator(mode="after")
    def require_url_for_http(self):
        if self.mode == ServiceMode.HTTP and not self.base_url:
            raise ValueError("wage_service.base_url is required when mode is 'http'")
        return self

    model_config = {"use_enum_values": True}


class MapConfig(BaseModel):
    """Renderer-facing settings for the county layer."""

    layer_id: str = Field("counties-fill", min_length=1)
    fill_property: str = Field("fill-color", min_length=1)
    name_property: str = Field("NAME", min_length=1, description="Feature property with the county name")
    state_property: str = Field("STATE", min_length=1, description="Feature property with the state FIPS")
    fit_padding: FitPadding = Field(default_factory=FitPadding)
    max_zoom: float = Field(9.0, ge=0, le=22)
    display_name_overrides: Dict[str, str] = Field(
        default_factory=dict,
        description="County name -> renderer label for names plain title case gets wrong",
    )
    strict_state_matching: bool = Field(
        False, description="Always split same-named counties by state"
    )

    @field_validator("display_name_overrides")
    @classmethod
    def normalize_override_keys(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Key overrides by normalized county name so "DeKalb County" and "dekalb" agree."""
        normalized = {}
        for name, label in v.items():
            key = normalize_county_name(name)
            if not key or not label.strip():
                raise ValueError(f"Invalid display name override: {name!r} -> {label!r}")
            normalized[key] = label.strip()
        return normalized


class SalaryConfig(BaseModel):
    """Offered-salary slider bounds."""

    default_salary: float = Field(120000, ge=0)
    min_salary: float = Field(0, ge=0)
    max_salary: float = Field(500000, gt=0)

    @model_validator(mode="after")
    def validate_range(self):
        if self.min_salary >= self.max_salary:
            raise ValueError("salary.min_salary must be below salary.max_salary")
        if not self.min_salary <= self.default_salary <= self.max_salary:
            raise ValueError("salary.default_salary must lie between min_salary and max_salary")
        return self

    def clamp(self, salary: float) -> float:
        return min(max(salary, self.min_salary), self.max_salary)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="json or key-value")

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the wage map."""

    data: DataConfig = Field(default_factory=DataConfig)
    wage_service: WageServiceConfig = Field(default_factory=WageServiceConfig)
    palette: ColorPalette = Field(default_factory=ColorPalette)
    map: MapConfig = Field(default_factory=MapConfig)
    salary: SalaryConfig = Field(default_factory=SalaryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def validate_palette_distinct(self):
        """Tier colors must differ or the map cannot show a tier change."""
        tiers = [self.palette.tier1, self.palette.tier2, self.palette.tier3, self.palette.tier4]
        if len(set(tiers)) != len(tiers):
            raise ValueError("palette tier colors must be distinct")
        return self
