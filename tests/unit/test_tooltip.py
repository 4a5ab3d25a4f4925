from __future__ import annotations

import pytest

from chartdata.models.dataset import transform_to_dataset
from chartdata.services.tooltip import get_series_tooltips_polar, get_series_tooltips_rectangular

ROWS = [
    {"category": "field", "type": "STRING", "colName": "Name"},
    {"colName": "Age", "aggregate": "AVG", "type": "STRING", "category": "field"},
    {"colName": "Color", "type": "STRING", "category": "field"},
    {"colName": "Info", "aggregate": "SUM", "type": "NUMERIC", "category": "field"},
    {"colName": "Size", "aggregate": "COUNT", "type": "NUMERIC", "category": "field"},
]
ROW_DATA = {
    "Name": "r1-c1-v",
    "Color": "#fff",
    "AVG(Age)": "r1-c2-v",
    "SUM(Info)": "10",
    "COUNT(Size)": "20",
}


@pytest.fixture()
def dataset():
    return transform_to_dataset(
        [["r1-c1-v", "r1-c2-v", "#fff", "10", "20"]],
        [
            {"name": "name"},
            {"name": "avg(age)"},
            {"name": "color"},
            {"name": "sum(info)"},
            {"name": "count(size)"},
        ],
        [{"rows": ROWS}],
    )


def test_rectangular_unknown_series_has_no_tooltip(dataset):
    param = {"seriesName": "b", "componentType": "", "data": {"name": "a", "rowData": ROW_DATA}}
    assert get_series_tooltips_rectangular(dataset, param, [ROWS[0]], [ROWS[2]], [ROWS[1]], [ROWS[3]], [ROWS[4]]) == ""


def test_rectangular_metric_series(dataset):
    param = {"seriesName": "", "componentType": "series", "data": {"name": "AVG(Age)", "rowData": ROW_DATA}}
    assert (
        get_series_tooltips_rectangular(dataset, param, [ROWS[0]], [ROWS[2]], ROWS, [ROWS[3]], [ROWS[4]])
        == "Name: r1-c1-v<br />Color: #fff<br />AVG(Age): r1-c2-v<br />COUNT(Size): 20<br />SUM(Info): 10"
    )


def test_rectangular_falls_back_to_series_name(dataset):
    param = {"seriesName": "Name", "componentType": "series", "data": {"name": "", "rowData": ROW_DATA}}
    assert (
        get_series_tooltips_rectangular(dataset, param, [ROWS[0]], [ROWS[2]], ROWS, [ROWS[3]], [ROWS[4]])
        == "Name: r1-c1-v<br />Color: #fff<br />Name: r1-c1-v<br />COUNT(Size): 20<br />SUM(Info): 10"
    )


@pytest.mark.parametrize("component", ["markLine", "markArea"])
def test_mark_components(dataset, component):
    param = {"componentType": component, "name": "average", "value": 25.0}
    assert get_series_tooltips_rectangular(dataset, param, [], [], []) == "average: 25"
    assert get_series_tooltips_polar(dataset, param, [], [], []) == "average: 25"


def test_polar_lists_every_field(dataset):
    param = {"data": {"name": "string", "rowData": ROW_DATA}}
    assert (
        get_series_tooltips_polar(dataset, param, [ROWS[0]], [ROWS[2]], [ROWS[1]], [ROWS[3]], [ROWS[4]])
        == "Name: r1-c1-v<br />Color: #fff<br />AVG(Age): r1-c2-v<br />COUNT(Size): 20<br />SUM(Info): 10"
    )


def test_tooltip_formats_values_and_custom_separator():
    rows = [
        {"colName": "Name"},
        {
            "colName": "Amount",
            "aggregate": "SUM",
            "format": {"type": "numeric", "numeric": {"decimalPlaces": 1, "unitKey": "thousand"}},
        },
    ]
    dataset = transform_to_dataset([["a", 1500]], [{"name": "name"}, {"name": "SUM(amount)"}], [{"rows": rows}])
    param = {"data": {"rowData": {"Name": "a", "SUM(Amount)": 1500}}}
    assert get_series_tooltips_polar(dataset, param, [rows[0]], [], [rows[1]], separator=" | ") == "Name: a | SUM(Amount): 1.5K"


def test_empty_event(dataset):
    assert get_series_tooltips_rectangular(dataset, None, [], [], []) == ""
    assert get_series_tooltips_polar(dataset, {}, [], [], []) == ""
    assert get_series_tooltips_polar(dataset, {"data": {}}, [ROWS[0]], [], []) == ""
