import math
import re

import pytest

from core.dms import axis_to_dms, split_dms, to_dms

DMS_RE = re.compile(r"^(\d+)°(\d+)′(\d+)″([NSEW])$")


def test_burj_khalifa():
    assert to_dms(25.1972, 55.2744) == "25°11′50″N, 55°16′28″E"


def test_origin_uses_north_and_east():
    assert to_dms(0, 0) == "0°0′0″N, 0°0′0″E"


def test_sydney_is_south_east():
    result = to_dms(-33.8688, 151.2093)
    lat_part, lng_part = result.split(", ")
    assert lat_part.endswith("S")
    assert lng_part.endswith("E")
    assert result == "33°52′8″S, 151°12′33″E"


def test_western_hemisphere():
    assert to_dms(40.7128, -74.0060).endswith("W")


def test_seconds_rounding_to_sixty_carries_into_minutes():
    # 10.9999999 -> 10°59′59.99964″ -> 11°0′0″
    assert split_dms(10.9999999) == (11, 0, 0)
    assert axis_to_dms(-10.9999999, "N", "S") == "11°0′0″S"


def test_half_second_rounds_up():
    # 1/7200 degrees is exactly half a second
    assert split_dms(1 / 7200) == (0, 0, 1)
    assert split_dms(0.25) == (0, 15, 0)


@pytest.mark.parametrize("lat, lng", [
    (90, 180),
    (-90, -180),
    (89.99999, 179.99999),
    (12.345678, -98.765432),
    (-0.0001, 0.0001),
])
def test_components_stay_in_range(lat, lng):
    for part, limit in zip(to_dms(lat, lng).split(", "), (90, 180)):
        match = DMS_RE.match(part)
        assert match is not None
        degrees, minutes, seconds = (int(match.group(i)) for i in (1, 2, 3))
        assert 0 <= degrees <= limit
        assert 0 <= minutes <= 59
        assert 0 <= seconds <= 59


def test_non_finite_input_rejected():
    with pytest.raises(ValueError):
        to_dms(math.nan, 0)
    with pytest.raises(ValueError):
        to_dms(0, math.inf)
