"""Loading the static JSON artifacts produced by the reference build."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from wagemap.domain.models import JobCategory
from wagemap.geography.directory import AreaDirectory
from wagemap.logging import get_logger
from wagemap.rendering.models import RenderedFeature

from .exceptions import ReferenceDataError
from .ingest import COUNTY_MAPPING_ARTIFACT, JOB_CATEGORIES_ARTIFACT

logger = get_logger(__name__, component="reference")


@dataclass(frozen=True)
class ReferenceData:
    """Everything a session needs before any job category is chosen."""

    directory: AreaDirectory
    job_categories: Tuple[JobCategory, ...]


def read_json(path: Path) -> Any:
    """Read a JSON artifact.

    Raises:
        ReferenceDataError: File missing or not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ReferenceDataError(
            f"Reference artifact not found: {path}. Run 'wagemap build-data' first.", path=path
        ) from e
    except (OSError, json.JSONDecodeError) as e:
        raise ReferenceDataError(f"Failed to read {path}: {e}", path=path) from e


def load_job_categories(path: Path) -> List[JobCategory]:
    data = read_json(path)
    if not isinstance(data, list):
        raise ReferenceDataError(f"Expected JSON array in {path}, got {type(data).__name__}", path=path)

    categories = []
    for row in data:
        try:
            categories.append(JobCategory.model_validate(row))
        except ValidationError:
            logger.warning(
                "Skipping malformed job category",
                extra={"event": "reference.job_category.skipped", "path": str(path)},
            )
    return categories


def load_directory(path: Path) -> AreaDirectory:
    data = read_json(path)
    if not isinstance(data, dict):
        raise ReferenceDataError(f"Expected JSON object in {path}, got {type(data).__name__}", path=path)
    return AreaDirectory.from_mapping(data)


def load_reference_data(
    data_dir: Path,
    county_mapping_file: str = COUNTY_MAPPING_ARTIFACT,
    job_categories_file: str = JOB_CATEGORIES_ARTIFACT,
) -> ReferenceData:
    """Load the Area Directory and the searchable job categories.

    Raises:
        ReferenceDataError: If an artifact is missing or malformed
    """
    data_dir = Path(data_dir)
    directory = load_directory(data_dir / county_mapping_file)
    categories = load_job_categories(data_dir / job_categories_file)

    logger.info(
        "Reference data loaded",
        extra={
            "event": "reference.loaded",
            "data_dir": str(data_dir),
            "area_count": len(directory),
            "job_category_count": len(categories),
        },
    )
    return ReferenceData(directory=directory, job_categories=tuple(categories))


def load_rendered_features(
    path: Path, name_property: str = "NAME", state_property: str = "STATE"
) -> List[RenderedFeature]:
    """Read county polygons from a GeoJSON FeatureCollection.

    Features missing either property are skipped. The feature ``id`` is used
    as the renderer feature id when present, else the feature's position.
    """
    data = read_json(Path(path))
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise ReferenceDataError(f"{path} is not a GeoJSON FeatureCollection", path=Path(path))

    features = []
    for position, feature in enumerate(data["features"]):
        properties = feature.get("properties") or {}
        name: Optional[str] = properties.get(name_property)
        state = properties.get(state_property)
        if not name or state is None:
            continue
        features.append(
            RenderedFeature(
                feature_id=feature.get("id", position),
                county_name=str(name),
                state_code=str(state),
                geometry=feature.get("geometry"),
            )
        )
    return features
