"""Reference data: CSV build, artifact loading and search."""

from .exceptions import ReferenceDataError
from .ingest import BuildResult, build_reference_data
from .search import LocationMatch, search_job_categories, search_locations
from .store import ReferenceData, load_reference_data, load_rendered_features

__all__ = [
    "ReferenceDataError",
    "BuildResult",
    "build_reference_data",
    "ReferenceData",
    "load_reference_data",
    "load_rendered_features",
    "LocationMatch",
    "search_job_categories",
    "search_locations",
]
