from itertools import islice
from typing import Iterable, NamedTuple

from eightbit_weather.config import DEFAULT_HORIZON

__all__ = ['DramaticChange', 'select_most_dramatic_change']


class DramaticChange(NamedTuple):
    """ The forecast value furthest from the current reading and how many hours out it is.

    An hour_offset of 0 means nothing in the forecast differs from the current value.
    """
    value: float
    hour_offset: int


def select_most_dramatic_change(current_value: float, series: Iterable[float],
                                horizon: int = DEFAULT_HORIZON) -> DramaticChange:
    """
    Find the most dramatic change in a weather metric over the next `horizon` hours
    :param current_value: the reading right now
    :param series: hourly forecast values, the first one being an hour from now
    :param horizon: number of hours to look ahead, anything past it is ignored
    :return: a DramaticChange with the chosen value and its 1-based hour offset
    """
    max_delta = 0
    best = DramaticChange(current_value, 0)
    # Only a strictly larger delta replaces the best, so the earliest hour wins a tie and NaN never wins
    for hour, value in enumerate(islice(series, max(horizon, 0)), start=1):
        delta = abs(value - current_value)
        if delta > max_delta:
            max_delta = delta
            best = DramaticChange(value, hour)
    return best
