from __future__ import annotations

import json
import math

import pytest

from chartdata.models.dataset import transform_to_dataset
from chartdata.services.series import (
    get_colorize_group_series_columns,
    get_data_column_max_and_min,
    get_scatter_symbol_size_fn,
    is_in_range,
    is_match_requirement,
)

SUM_NUM = {"colName": "num", "aggregate": "SUM", "type": "STRING", "category": "field"}


def test_colorize_groups_rows_by_color_value(profession_dataset):
    buckets = get_colorize_group_series_columns(profession_dataset, {"colName": "profession", "aggregate": "current"})
    assert json.dumps(buckets) == json.dumps(
        [
            {"engineer": [["stephen", "engineer", "36"], ["tom", "engineer", "30"]]},
            {"sales": [["jack", "sales", "28"], ["john", "sales", "32"]]},
        ]
    )


def test_colorize_puts_all_nan_cells_in_one_bucket():
    nan = float("nan")
    dataset = transform_to_dataset(
        [["a", nan], ["b", nan], ["c", None], ["d", None]], [{"name": "name"}, {"name": "color"}]
    )
    buckets = get_colorize_group_series_columns(dataset, {"colName": "color"})
    assert len(buckets) == 2
    [(nan_key, nan_rows)] = buckets[0].items()
    assert math.isnan(nan_key)
    assert [row[0] for row in nan_rows] == ["a", "b"]
    assert [row[0] for row in buckets[1]["-"]] == ["c", "d"]


def test_colorize_uses_formatted_key():
    dataset = transform_to_dataset([[0.5], [0.5], [0.25]], [{"name": "rate"}])
    field = {"colName": "rate", "format": {"type": "percentage", "percentage": {"decimalPlaces": 0}}}
    buckets = get_colorize_group_series_columns(dataset, field)
    assert [list(b) for b in buckets] == [["50%"], ["25%"]]
    assert len(buckets[0]["50%"]) == 2


def _num_dataset(cells):
    return transform_to_dataset(
        [[c] for c in cells],
        [{"name": "sum(num)"}],
        [{"rows": [{"colName": "num", "aggregate": "SUM"}]}],
    )


@pytest.mark.parametrize(
    "cells,config,expected",
    [
        (["5", "3", "-10", "999"], SUM_NUM, {"min": -10, "max": 999}),
        (["null", "3", "99"], SUM_NUM, {"min": 0, "max": 100}),
        (["null", "3", "990"], None, {"min": 0, "max": 100}),
        (["1.5", "2"], SUM_NUM, {"min": 1.5, "max": 2}),
    ],
)
def test_column_max_and_min(cells, config, expected):
    result = get_data_column_max_and_min(_num_dataset(cells), config)
    assert json.dumps(result) == json.dumps(expected)


def test_column_max_and_min_empty_dataset():
    assert get_data_column_max_and_min(_num_dataset([]), SUM_NUM) == {"min": 0, "max": 100}


@pytest.mark.parametrize(
    "value_index,max_value,min_value,cycle_ratio,point,expected",
    [
        (0, 100, 0, 0, [100], 20),
        (0, 100, 0, 2, [100], 40),
        (1, 999, -30, 0, [0, 100], 3),
        (1, 999, -30, 0, [0, 800], pytest.approx(16.132167152575317)),
    ],
)
def test_scatter_symbol_size(value_index, max_value, min_value, cycle_ratio, point, expected):
    size = get_scatter_symbol_size_fn(value_index, max_value, min_value, cycle_ratio)
    assert size(point) == expected


def test_scatter_symbol_size_edges():
    size = get_scatter_symbol_size_fn(0, 0, 0)
    # zero extent falls back to a distance of 100
    assert size([50]) == 10
    assert size(["n/a"]) == 3
    assert size([]) == 3
    assert size([float("inf")]) == 3
    assert size([float("-inf")]) == 3
    assert size([float("nan")]) == 3
    custom = get_scatter_symbol_size_fn(0, 100, 0, base_size=5, min_size=1)
    assert custom([100]) == 10
    assert custom([1]) == 1


@pytest.mark.parametrize(
    "limit,count,expected",
    [(None, 5, True), (1, 1, True), (2, 1, False), ([1, 999], 3, True), ([2, 3], 1, False), ([1], 7, True)],
)
def test_is_in_range(limit, count, expected):
    assert is_in_range(limit, count) is expected


def _datas(group_rows=1, aggregate_rows=1):
    return {
        "datas": [
            {"type": "group", "required": True, "rows": [{"colName": "category"}] * group_rows},
            {"type": "aggregate", "required": True, "rows": [{"colName": "amount"}] * aggregate_rows},
        ]
    }


def test_requirement_without_limits():
    meta = {"requirements": [{"group": None, "aggregate": None}]}
    assert is_match_requirement(meta, {"datas": [{}]})


def test_requirement_group_only():
    meta = {"requirements": [{"group": 1, "aggregate": None}]}
    config = {"datas": [{"type": "group", "required": True, "rows": [{"colName": "category"}]}]}
    assert is_match_requirement(meta, config)


def test_requirement_ranges():
    meta = {"requirements": [{"group": [1, 999], "aggregate": [1, 999]}]}
    assert is_match_requirement(meta, _datas())


def test_requirement_mismatch():
    meta = {"requirements": [{"group": 1, "aggregate": 2}]}
    assert not is_match_requirement(meta, _datas())


def test_requirement_any_alternative_matches():
    meta = {"requirements": [{"group": 1, "aggregate": 2}, {"group": 1, "aggregate": 1}]}
    assert is_match_requirement(meta, _datas())
    assert not is_match_requirement({"requirements": []}, _datas())


def test_requirement_ignores_optional_sections():
    meta = {"requirements": [{"group": 0, "aggregate": 1}]}
    config = _datas()
    config["datas"][0]["required"] = False
    assert is_match_requirement(meta, config)
