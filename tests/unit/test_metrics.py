from geoenrich.pipeline.metrics import density, derive_metrics, existing_metric, scaled_score


def test_density_floors_unusable_area_to_default():
    assert density(500, None) == 500
    assert density(500, 0) == 500
    assert density(500, -3) == 500
    assert density(500, 2.0) == 250


def test_derive_metrics_for_thousands_separated_area():
    metrics = derive_metrics(100000, 9062.0, {})

    assert metrics == {
        "competitors": 20,
        "public_services": 10,
        "site_suitability_score": 1,
        "night_lights": 1,
    }


def test_scaled_score_clamps_to_hundred():
    assert scaled_score(1_000_000, 500) == 100
    assert scaled_score(0, 500) == 0


def test_pre_existing_values_take_precedence():
    props = {"site_suitability_score": 77, "competitors": "3"}

    metrics = derive_metrics(1_500_000, 10.0, props)

    assert metrics["site_suitability_score"] == 77
    assert metrics["competitors"] == 3
    assert metrics["public_services"] == 150


def test_existing_metric_treats_blank_and_non_numeric_as_absent():
    assert existing_metric({}, "night_lights") is None
    assert existing_metric({"night_lights": None}, "night_lights") is None
    assert existing_metric({"night_lights": ""}, "night_lights") is None
    assert existing_metric({"night_lights": "n/a"}, "night_lights") is None
    assert existing_metric({"night_lights": 12.5}, "night_lights") == 13


def test_pre_existing_zero_is_kept_rather_than_recomputed():
    metrics = derive_metrics(1_500_000, 10.0, {"night_lights": 0, "public_services": "0"})

    assert metrics["night_lights"] == 0
    assert metrics["public_services"] == 0
    assert metrics["site_suitability_score"] == 100
