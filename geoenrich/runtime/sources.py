"""Boundary sources for the runtime transformer: mock, local file, or remote API."""

from __future__ import annotations

import logging
from pathlib import Path

from geoenrich.common.errors import MissingGeometryError
from geoenrich.common.geometry import load_feature_collection, require_feature_collection
from geoenrich.common.http import HttpClient, RetryConfig, TimeoutConfig
from geoenrich.common.keys import policy_for
from geoenrich.runtime.mock_data import mock_feature_collection
from geoenrich.runtime.transform import mapping_for, transform_feature_collection

logger = logging.getLogger(__name__)


def boundary_file_path(runtime_cfg: dict, boundary_type: str, data_dir: Path) -> Path:
    files = runtime_cfg.get("files", {})
    relative = files.get(boundary_type) or files.get("district")
    if not relative:
        raise MissingGeometryError(f"No boundary file configured for {boundary_type}")
    return data_dir / relative


def fetch_from_file(boundary_type: str, path: Path) -> dict:
    raw = load_feature_collection(path)
    return transform_feature_collection(raw, mapping_for(boundary_type), with_state_suffix=True)


def fetch_from_api(boundary_type: str, api_base_url: str, client: HttpClient) -> dict:
    url = f"{api_base_url.rstrip('/')}/api/boundaries/{boundary_type}"
    raw = require_feature_collection(client.get_json(url), url)
    return transform_feature_collection(raw, mapping_for(boundary_type))


def fetch_boundaries(
    boundary_type: str,
    runtime_cfg: dict,
    data_dir: Path,
    *,
    client: HttpClient | None = None,
) -> dict:
    """Load one boundary type from the configured source.

    Any failure propagates; there is no partial result.
    """
    policy_for(boundary_type)  # rejects unknown boundary types
    data_source = runtime_cfg.get("data_source", "mock")
    logger.debug("fetching %s boundaries from %s source", boundary_type, data_source)

    if data_source == "file":
        return fetch_from_file(boundary_type, boundary_file_path(runtime_cfg, boundary_type, data_dir))

    if data_source == "api":
        if client is not None:
            return fetch_from_api(boundary_type, runtime_cfg["api_base_url"], client)
        timeout = float(runtime_cfg.get("timeout_seconds", 30))
        with HttpClient(
            timeout=TimeoutConfig(read=timeout),
            retry=RetryConfig(max_attempts=int(runtime_cfg.get("retry_attempts", 1))),
        ) as owned_client:
            return fetch_from_api(boundary_type, runtime_cfg["api_base_url"], owned_client)

    return transform_feature_collection(mock_feature_collection())
