import logging
import random
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

__all__ = ['Metric', 'WeatherRange', 'WeatherDescriptor', 'WeatherDescriptions', 'UnknownMetricError',
           'IRangeSelectionStrategy', 'WeightedRandomStrategy', 'FirstMatchStrategy']

logger = logging.getLogger(__name__)


class Metric(str, Enum):
    """
    The weather quantities we know how to describe.  The values are the keys used throughout the app, so
    'temperature' and Metric.TEMPERATURE can be used interchangeably.
    """
    TEMPERATURE = 'temperature'
    WIND_SPEED = 'windSpeed'
    PRECIPITATION = 'precipitation'
    PRECIPITATION_CHANCE = 'precipitationChance'
    CLOUD_COVER = 'cloudCover'

    def __str__(self):
        return self.value


class UnknownMetricError(KeyError):
    """ Raised when asked about a metric that has no descriptor in the table """

    def __init__(self, metric):
        super().__init__(metric)
        self.metric = metric

    def __str__(self):
        return f'Unknown weather metric: {self.metric}'


class WeatherRange:
    """
    A closed interval [min, max] of a metric along with the phrases that describe it.  Ranges for the same metric
    may overlap, in which case the weight decides how often each one gets picked.
    """

    def __init__(self, min: float, max: float, descriptions: Sequence[str], weight: float = 1):
        """
        :param min: lower bound (inclusive)
        :param max: upper bound (inclusive)
        :param descriptions: one or more phrases, one of which is picked at random
        :param weight: relative likelihood of this range being chosen when it overlaps with others
        """
        if min > max:
            raise ValueError(f'Range minimum {min} is greater than its maximum {max}')
        if isinstance(descriptions, str) or not descriptions:
            raise ValueError('A range needs a non-empty list of descriptions')
        if weight is None:
            weight = 1
        if not weight > 0:
            raise ValueError(f'Range weight must be greater than zero, got {weight}')
        self._min = min
        self._max = max
        self._descriptions = tuple(descriptions)
        self._weight = weight

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    @property
    def descriptions(self) -> Sequence[str]:
        return self._descriptions

    @property
    def weight(self) -> float:
        return self._weight

    def contains(self, value: float) -> bool:
        return self._min <= value <= self._max

    def __eq__(self, other):
        if not isinstance(other, WeatherRange):
            return NotImplemented
        return (self.min, self.max, self.descriptions, self.weight) == \
               (other.min, other.max, other.descriptions, other.weight)

    def __repr__(self):
        return f'WeatherRange(min={self.min!r}, max={self.max!r}, ' \
            f'descriptions={list(self.descriptions)!r}, weight={self.weight!r})'


class WeatherDescriptor:
    """ Everything needed to render one metric: its unit, a fallback phrase and its ranges """

    def __init__(self, unit: str, default_description: str, ranges: Sequence[WeatherRange] = ()):
        self.unit = unit
        self.default_description = default_description
        self.ranges: List[WeatherRange] = sorted(ranges, key=lambda r: r.min)

    def matching_ranges(self, value: float) -> List[WeatherRange]:
        return [r for r in self.ranges if r.contains(value)]

    def __repr__(self):
        return f'WeatherDescriptor(unit={self.unit!r}, default_description={self.default_description!r}, ' \
            f'ranges={self.ranges!r})'


class IRangeSelectionStrategy(ABC):
    """ Decides which of several matching ranges gets to describe a value """

    @abstractmethod
    def select(self, ranges: Sequence[WeatherRange], rng) -> WeatherRange:
        """
        :param ranges: the ranges containing the value, never empty
        :param rng: a source of randomness with `random()` and `choice()`
        :return: one of the ranges
        """
        raise NotImplementedError


class WeightedRandomStrategy(IRangeSelectionStrategy):
    """ Pick a range at random, with the odds proportional to the range weights """

    def select(self, ranges, rng):
        total_weight = sum(r.weight for r in ranges)
        draw = rng.random() * total_weight
        cumulative = 0
        for r in ranges:
            cumulative += r.weight
            if cumulative > draw:
                return r
        # Rounding can leave the draw at the very top of the total
        return ranges[0]


class FirstMatchStrategy(IRangeSelectionStrategy):
    """ Always pick the first matching range, handy when the output must be repeatable """

    def select(self, ranges, rng):
        return ranges[0]


_DEFAULT_TABLE = {
    Metric.TEMPERATURE: ('°F', 'moderate temperature', [
        (-100, 0, ['Stay inside!', 'Ice cold, stay warm!']),
        (0, 32, ['Wear a winter coat!', "Bundle up, it's freezing!"]),
        (32, 50, ['Chilly, wear a jacket!', 'Cold, wear a coat!']),
        (50, 60, ['Cool, wear a sweater!', 'Cool, grab a hoodie!']),
        (60, 70, ['Nice and comfy!', 'Pleasant, enjoy the day!']),
        (70, 80, ['Perfect for playing!', 'Warm, perfect for fun!']),
        (80, 90, ['Hot, drink water!', 'Hot, stay hydrated!']),
        (90, 150, ['Too hot, stay cool!', 'Scorching, find shade!']),
    ]),
    Metric.WIND_SPEED: ('mph', 'calm air', [
        (0, 5, ['Gentle breeze', 'Barely a breeze']),
        (5, 15, ['Windy, hold your hat!', 'Windy, hold tight!']),
        (15, 30, ['Loud wind', 'Strong wind, be cautious!']),
        (30, 45, ['Very windy, be careful!', 'Very windy, stay safe!']),
        (45, 100, ['Go to the basement!', 'Stormy, stay indoors!']),
    ]),
    Metric.PRECIPITATION_CHANCE: ('%', 'no chance of rain', [
        (0, 10, ['No rain, play outside!', 'No rain, have fun!']),
        (10, 30, ['Maybe rain, check sky!', 'Might rain, keep an eye!']),
        (30, 50, ['Possible rain, watch out!', 'Rain possible, be ready!']),
        (50, 70, ['Better take an umbrella!', 'Rain likely, take cover!']),
        (70, 90, ['Rain likely, stay dry!', 'Rain expected, stay dry!']),
        (90, 100, ['Rain for sure, stay inside!', 'Rain certain, stay inside!']),
    ]),
    Metric.PRECIPITATION: ('"', 'no rain', [
        (0, 0.1, ['Just a drip', 'Tiny drizzle']),
        (0.1, 0.3, ['Light rain, wear boots!']),
        (0.3, 0.5, ['Rainy, wear a raincoat!', 'Rainy, need a coat!']),
        (0.5, 1, ['Heavy rain, stay dry!']),
        (1, 10, ['Flooding, stay safe!']),
    ]),
    Metric.CLOUD_COVER: ('%', 'bleh', [
        (0, 10, ['Very sunny!', "You'll need sunglasses!"]),
        (10, 30, ['A few clouds, still sunny!', 'Mostly sunny, few clouds!']),
        (30, 50, ['Partly cloudy, nice day!']),
        (50, 70, ['Mostly cloudy, less sun!']),
        (70, 90, ['Cloudy, no sun!', 'Just a peek of sun']),
        (90, 100, ['Overcast, gray sky!', 'A real London Souper', 'Completely cloudy']),
    ]),
}


def default_descriptors() -> Dict[Metric, WeatherDescriptor]:
    """ Build a fresh copy of the built-in rule table """
    return {metric: WeatherDescriptor(unit, default, [WeatherRange(lo, hi, d) for lo, hi, d in ranges])
            for metric, (unit, default, ranges) in _DEFAULT_TABLE.items()}


class WeatherDescriptions:
    """
    The rule table that turns numbers into words.

    Each instance owns its own descriptors, so build one at start-up and hand it to whoever renders.  Reads can
    happen from several threads; `add_range` swaps in a new, sorted list of ranges rather than appending in place
    so a reader sees either the old list or the new one.
    """

    def __init__(self, descriptors: Optional[Dict[Union[Metric, str], WeatherDescriptor]] = None,
                 strategy: Optional[IRangeSelectionStrategy] = None, rng=None, seed=None):
        """
        :param descriptors: metric -> descriptor.  Defaults to the built-in table.
        :param strategy: how to choose between overlapping ranges, weighted random by default
        :param rng: random source with `random()` and `choice()`, defaults to the `random` module
        :param seed: convenience for a private `random.Random(seed)` when no rng is given
        """
        if descriptors is None:
            descriptors = default_descriptors()
        # Each table gets its own descriptors so add_range on one never shows up in another
        self._descriptors: Dict[Metric, WeatherDescriptor] = {
            Metric(m): WeatherDescriptor(d.unit, d.default_description, d.ranges) for m, d in descriptors.items()}
        self.strategy = strategy if strategy is not None else WeightedRandomStrategy()
        if rng is None:
            rng = random.Random(seed) if seed is not None else random
        self.rng = rng
        self._lock = threading.Lock()

    @property
    def metrics(self) -> List[Metric]:
        return list(self._descriptors.keys())

    def _lookup(self, metric) -> Optional[WeatherDescriptor]:
        try:
            return self._descriptors.get(Metric(metric))
        except ValueError:
            return None

    def get_descriptor(self, metric) -> WeatherDescriptor:
        descriptor = self._lookup(metric)
        if descriptor is None:
            raise UnknownMetricError(metric)
        return descriptor

    def matching_ranges(self, metric, value: float) -> List[WeatherRange]:
        return self.get_descriptor(metric).matching_ranges(value)

    def describe(self, metric, value: float, rng=None) -> str:
        """
        Get a description for a weather value
        :param metric: which metric the value is for
        :param value: the reading
        :param rng: overrides the table's random source for this call
        :return: a phrase from one of the ranges containing the value, or the metric's default phrase
        """
        descriptor = self.get_descriptor(metric)
        matching = descriptor.matching_ranges(value)
        if not matching:
            return descriptor.default_description
        rng = rng if rng is not None else self.rng
        selected = self.strategy.select(matching, rng)
        return rng.choice(selected.descriptions)

    def format_raw_value(self, metric, value: float) -> str:
        """ Get the raw value with its unit, or just the value if we don't know the metric """
        descriptor = self._lookup(metric)
        return f'{value}{descriptor.unit}' if descriptor is not None else f'{value}'

    def add_range(self, metric, weather_range: WeatherRange) -> None:
        """ Add a new range to a weather metric and keep the ranges ordered by their minimum """
        descriptor = self.get_descriptor(metric)
        with self._lock:
            descriptor.ranges = sorted(descriptor.ranges + [weather_range], key=lambda r: r.min)
        logger.debug(f'Added {weather_range!r} to {metric}')
