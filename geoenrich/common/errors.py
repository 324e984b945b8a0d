"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class StageError(PipelineError):
    """Raised for failures that abort a single boundary-type run."""

    error_code = "STAGE_ERROR"


class MissingGeometryError(StageError):
    """Raised when the boundary GeoJSON for a run does not exist."""

    error_code = "MISSING_GEOMETRY"


class InvalidPayloadError(StageError):
    """Raised when a boundary source does not return a FeatureCollection."""

    error_code = "INVALID_PAYLOAD"


class UnsupportedGeometryError(PipelineError):
    """Raised by the runtime transformer for non-polygonal features."""

    error_code = "UNSUPPORTED_GEOMETRY"
