from __future__ import annotations

from pathlib import Path

import pytest

from geoenrich.common.fs import write_json


def _square(lon: float, lat: float) -> dict:
    return {
        "type": "Polygon",
        "coordinates": [[[lon, lat], [lon + 0.1, lat], [lon + 0.1, lat + 0.1], [lon, lat + 0.1], [lon, lat]]],
    }


def _collection(features: list[tuple[dict, float, float]]) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "properties": props, "geometry": _square(lon, lat)} for props, lon, lat in features
        ],
    }


def write_sample_dataset(data_dir: Path) -> Path:
    """Lay out a small dataset matching config/boundaries.yml."""
    geo = data_dir / "datasets" / "geodata"
    census = data_dir / "datasets" / "census"
    economy = data_dir / "datasets" / "economy"
    census.mkdir(parents=True, exist_ok=True)
    economy.mkdir(parents=True, exist_ok=True)

    write_json(
        geo / "administrative_2_district.geojson",
        _collection(
            [
                ({"code_state_district": "1_1", "district": "Batu Pahat", "state": "Johor"}, 102.9, 1.8),
                (
                    {"code_state_district": "1_2", "district": "Johor Bahru", "state": "Johor",
                     "site_suitability_score": 77},
                    103.7,
                    1.5,
                ),
                ({"code_state_district": "9_9", "district": "Nowhere", "state": "Perlis"}, 100.2, 6.4),
            ]
        ),
    )
    (census / "census_district.csv").write_text(
        "state,district,code_state_district,year,population_total,area_km2\n"
        'Johor,Batu Pahat,1_1,2010,90000,"1,873"\n'
        'Johor,Batu Pahat,1_1,2020,100000,"9,062"\n'
        'Johor,Johor Bahru,1_2,2020,1500000,"1,064"\n',
        encoding="utf-8",
    )
    (economy / "hies_district.csv").write_text(
        "area_type,area,income_mean\nstate,Johor,8013\ndistrict,Batu Pahat,6200.4\n",
        encoding="utf-8",
    )

    write_json(
        geo / "electoral_0_parlimen.geojson",
        _collection(
            [
                ({"code_parlimen": "P.001", "parlimen": "Padang Besar", "state": "Perlis"}, 100.2, 6.6),
                ({"code_parlimen": "P.002", "parlimen": "Kangar", "state": "Perlis"}, 100.2, 6.4),
            ]
        ),
    )
    (census / "census_parlimen.csv").write_text(
        "code_parlimen,year,population_total,income_avg\nP.001,2020,90000,4500.6\n",
        encoding="utf-8",
    )

    write_json(
        geo / "electoral_1_dun.geojson",
        _collection(
            [
                ({"code_state_dun": "9_N.01", "code_dun": "N.01", "dun": "Titi Tinggi", "state": "Perlis"}, 100.1, 6.6),
                ({"code_dun": "N.02", "dun": "Beseri", "state": "Perlis"}, 100.2, 6.5),
            ]
        ),
    )
    (census / "census_dun.csv").write_text(
        "code_state_dun,year,population_total\n9_N.01,2020,20000\n9_N.01,2015,15000\n",
        encoding="utf-8",
    )
    return data_dir


@pytest.fixture
def sample_data_dir(tmp_path: Path) -> Path:
    return write_sample_dataset(tmp_path / "data")


@pytest.fixture
def dataset_writer():
    return write_sample_dataset
