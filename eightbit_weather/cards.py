"""
Builds the weather "cards" shown to the user.

Every card covers one metric.  The front shows the reading right now and the most dramatic change expected within
the horizon, each with a description from the rule table.  The back shows each hourly reading as a bar going
above or below a baseline at the current value.
"""
import logging
from typing import List, Sequence, Tuple

from eightbit_weather.config import DEFAULT_HORIZON
from eightbit_weather.dramatic_change import select_most_dramatic_change
from eightbit_weather.utility import format_hour
from eightbit_weather.weather_descriptions import Metric, WeatherDescriptions
from eightbit_weather.weather_observation import WeatherData

__all__ = ['WeatherCard', 'CARD_ORDER', 'build_card', 'build_cards', 'render_card']

logger = logging.getLogger(__name__)

# Card id -> metric, in the order the cards are laid out
CARD_ORDER = [('temp', Metric.TEMPERATURE),
              ('precip', Metric.PRECIPITATION_CHANCE),
              ('rain', Metric.PRECIPITATION),
              ('cloud', Metric.CLOUD_COVER),
              ('wind', Metric.WIND_SPEED)]

_CARD_TITLES = {Metric.TEMPERATURE: 'Temperature',
                Metric.PRECIPITATION_CHANCE: 'Chance of rain',
                Metric.PRECIPITATION: 'Precipitation',
                Metric.CLOUD_COVER: 'Cloud cover',
                Metric.WIND_SPEED: 'Wind speed'}

# Characters available on each side of the baseline
GRAPH_HALF_WIDTH = 10


class WeatherCard:

    def __init__(self, card_id: str, metric: Metric, current_raw: str, current_description: str,
                 later_raw: str, later_description: str, hour_offset: int,
                 graph: List[Tuple[str, float]] = None, current: float = None):
        self.card_id = card_id
        self.metric = metric
        self.current_raw = current_raw
        self.current_description = current_description
        self.later_raw = later_raw
        self.later_description = later_description
        self.hour_offset = hour_offset
        self.graph = graph or []
        self.current = current
        self.flipped = False

    @property
    def title(self) -> str:
        return _CARD_TITLES.get(self.metric, str(self.metric))

    def flip(self) -> 'WeatherCard':
        """ Turn the card over, front to back or back to front """
        self.flipped = not self.flipped
        return self

    def __repr__(self):
        return f'WeatherCard({self.card_id!r}, now={self.current_raw!r}, ' \
            f'later={self.later_raw!r} in {self.hour_offset}h)'


def _round(value, places=1):
    """ Round for display, leaving NaN and whole numbers alone """
    if value != value:
        return value
    value = round(float(value), places)
    return int(value) if value.is_integer() else value


def build_card(metric, current: float, hourly_values: Sequence[float], hourly_times: Sequence,
               descriptions: WeatherDescriptions, horizon: int = DEFAULT_HORIZON, card_id: str = None,
               rng=None) -> WeatherCard:
    """
    Build the card for one metric
    :param metric: the metric the card shows
    :param current: the reading right now
    :param hourly_values: forecast readings, the first an hour from now
    :param hourly_times: timestamps matching hourly_values, used for the graph labels
    :param descriptions: the rule table used for the phrases and units
    :param horizon: how many hours ahead to consider
    :param card_id: identifier of the card, defaults to the metric name
    :param rng: random source handed to the rule table
    :return: the card, front side up
    """
    metric = Metric(metric)
    values = list(hourly_values)
    change = select_most_dramatic_change(current, values, horizon)
    logger.debug(f'{metric}: now {current}, most dramatic {change.value} in {change.hour_offset}h')

    later = change.value
    graph = [(format_hour(t), _round(v)) for t, v in zip(list(hourly_times)[:max(horizon, 0)], values)]
    return WeatherCard(card_id=card_id or metric.value, metric=metric,
                       current_raw=descriptions.format_raw_value(metric, _round(current)),
                       current_description=descriptions.describe(metric, current, rng=rng),
                       later_raw=descriptions.format_raw_value(metric, _round(later)),
                       later_description=descriptions.describe(metric, later, rng=rng),
                       hour_offset=change.hour_offset, graph=graph, current=current)


def build_cards(weather_data: WeatherData, descriptions: WeatherDescriptions, horizon: int = DEFAULT_HORIZON,
                rng=None) -> List[WeatherCard]:
    """ Build one card per metric, in display order """
    times = weather_data.hourly_times
    return [build_card(metric, weather_data.current.value(metric), weather_data.series(metric), times,
                       descriptions, horizon=horizon, card_id=card_id, rng=rng)
            for card_id, metric in CARD_ORDER]


def _graph_line(label, value, current, scale) -> str:
    """ One hour of the graph: '-' bars left of the baseline for a drop, '+' bars right of it for a rise """
    delta = value - current
    left = right = ' ' * GRAPH_HALF_WIDTH
    if delta == delta and delta != 0 and scale:
        n = max(1, round(abs(delta) / scale * GRAPH_HALF_WIDTH))
        if delta < 0:
            left = ('-' * n).rjust(GRAPH_HALF_WIDTH)
        else:
            right = ('+' * n).ljust(GRAPH_HALF_WIDTH)
    if value != value:
        return f'  {label:>4} {left}|{right} ?'
    line = f'  {label:>4} {left}|{right} {value:.1f}'
    # Relative change only means something when there is a non-zero reading to compare against
    if current == current and current != 0:
        line += f' ({delta / abs(current) * 100:+.1f}%)'
    return line


def render_card(card: WeatherCard) -> List[str]:
    """
    Text lines for a card, the front (now and later) or, once flipped, the back (hourly graph)
    """
    lines = [f'[{card.title}]']
    if not card.flipped:
        lines.append(f'  Now: {card.current_raw} - {card.current_description}')
        if card.hour_offset:
            lines.append(f'  In {card.hour_offset}h: {card.later_raw} - {card.later_description}')
        else:
            lines.append('  No big change coming up')
        return lines

    if not card.graph:
        lines.append('  No hourly forecast')
        return lines
    current = card.current if card.current is not None else float('nan')
    deltas = [abs(v - current) for _, v in card.graph if abs(v - current) == abs(v - current)]
    scale = max(deltas) if deltas else 0
    baseline = f'{current:.1f}' if current == current else '?'
    lines.append(f'  {"now":>4} {" " * GRAPH_HALF_WIDTH}|{" " * GRAPH_HALF_WIDTH} {baseline}')
    for label, value in card.graph:
        lines.append(_graph_line(label, value, current, scale))
    return lines
