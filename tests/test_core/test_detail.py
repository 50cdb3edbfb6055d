"""Tests for detail-level mapping."""

import pytest

from photorender.core.contracts import DetailLevel
from photorender.core.detail import map_detail
from photorender.core.errors import InvalidDetailLevel


@pytest.mark.parametrize("token,expected", [
    ("preview", DetailLevel.PREVIEW),
    ("reduced", DetailLevel.REDUCED),
    ("medium", DetailLevel.MEDIUM),
    ("Medium", DetailLevel.MEDIUM),
    ("FULL", DetailLevel.FULL),
    ("rAw", DetailLevel.RAW),
])
def test_known_tokens(token, expected):
    assert map_detail(token) is expected


@pytest.mark.parametrize("token", ["", "med", "mediums", " medium", "high", "ultra"])
def test_unknown_tokens_fail(token):
    with pytest.raises(InvalidDetailLevel) as excinfo:
        map_detail(token)
    assert excinfo.value.token == token


def test_levels_are_ordered_by_fidelity():
    assert DetailLevel.PREVIEW < DetailLevel.REDUCED < DetailLevel.MEDIUM < DetailLevel.FULL < DetailLevel.RAW
    assert max(DetailLevel) is DetailLevel.RAW
    assert sorted([DetailLevel.FULL, DetailLevel.PREVIEW]) == [DetailLevel.PREVIEW, DetailLevel.FULL]
