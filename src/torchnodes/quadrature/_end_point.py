from typing import Literal, get_args

from torchnodes.quadrature._exceptions import ConfigurationError

EndPoint = Literal[
    "neither",
    "left",
    "right",
    "both",
]

_END_POINTS = get_args(EndPoint)


def _check_end_point(end_point: str) -> None:
    if end_point not in _END_POINTS:
        raise ConfigurationError(
            f"end_point must be one of {_END_POINTS}, got {end_point!r}"
        )


def _includes_left(end_point: EndPoint) -> bool:
    return end_point in ("left", "both")


def _includes_right(end_point: EndPoint) -> bool:
    return end_point in ("right", "both")
