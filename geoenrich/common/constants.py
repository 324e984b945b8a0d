"""Application constants."""

USER_AGENT = "geoenrich/1.0 (+boundary enrichment)"
BOUNDARY_TYPES = ("district", "parliament", "dun")
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20
UNKNOWN_NAME = "Unknown"
DEFAULT_AREA_KM2 = 1.0
METRIC_FIELDS = (
    "population",
    "avg_income",
    "competitors",
    "public_services",
    "site_suitability_score",
    "night_lights",
)
ENRICHED_FIELDS = ("id", "name", *METRIC_FIELDS, "hasCensusData")
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "boundary_type",
    "event",
    "status",
    "features_in",
    "matched",
    "unmatched",
    "rows_in",
    "rows_out",
    "path",
    "error_code",
    "message",
)
