"""위경도 -> 도분초(DMS) 문자열 변환"""
import math
from typing import Tuple


def _round_half_up(value: float) -> int:
    # 음수가 아닌 값만 들어옴 (round()는 banker's rounding이라 사용하지 않음)
    return int(math.floor(value + 0.5))


def split_dms(value: float) -> Tuple[int, int, int]:
    """
    절댓값 기준으로 (도, 분, 초)를 계산합니다.

    초가 60으로 반올림되면 분으로, 분이 60이 되면 도로 올림합니다.
    """
    if not math.isfinite(value):
        raise ValueError(f"유한한 숫자가 아닙니다: {value}")

    absolute = abs(value)
    degrees = int(math.floor(absolute))
    minutes_float = (absolute - degrees) * 60
    minutes = int(math.floor(minutes_float))
    seconds = _round_half_up((minutes_float - minutes) * 60)

    if seconds == 60:
        seconds = 0
        minutes += 1
    if minutes == 60:
        minutes = 0
        degrees += 1
    return degrees, minutes, seconds


def axis_to_dms(value: float, positive: str, negative: str) -> str:
    """한 축의 좌표를 D°M′S″H 형식으로 변환 (0은 양수 쪽 반구)"""
    degrees, minutes, seconds = split_dms(value)
    hemisphere = positive if value >= 0 else negative
    return f"{degrees}°{minutes}′{seconds}″{hemisphere}"


def to_dms(lat: float, lng: float) -> str:
    """
    위도/경도를 DMS 문자열로 변환합니다.

    예: (25.1972, 55.2744) -> "25°11′50″N, 55°16′28″E"
    """
    return f"{axis_to_dms(lat, 'N', 'S')}, {axis_to_dms(lng, 'E', 'W')}"
