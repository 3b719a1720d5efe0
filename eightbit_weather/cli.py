"""Console script for eightbit_weather."""
import datetime as dt
import logging
import random
import sys

import click
import pandas as pd

from eightbit_weather import config
from eightbit_weather.cards import build_card, build_cards, render_card, CARD_ORDER
from eightbit_weather.location import search_locations, format_location_string
from eightbit_weather.weather_descriptions import Metric, WeatherDescriptions
from eightbit_weather.weather_observation import Weather

NOW = dt.datetime.now()

Colors = {'Title': 'blue', 'Description': 'cyan', 'Prompt': 'yellow', 'Error': 'red', 'Output': 'green',
          'Alternate_Output': 'cyan'}

TITLE = f'#{"-" * 18} 8-Bit Weather! {"-" * 18}#'

metric_names = [m.value for m in Metric]


def _setup_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def _prompt(s: str):
    return click.style(s, fg=Colors['Prompt'])


def _rng(seed):
    return random.Random(seed) if seed is not None else None


def _echo_cards(cards, flip=False):
    for card in cards:
        if flip:
            card.flip()
        for i, line in enumerate(render_card(card)):
            click.secho(line, fg=Colors['Title'] if i == 0 else Colors['Output'])


def choose_location(location_name: str):
    """
    Look up a location and, when there is more than one candidate, ask the user which one they meant
    :param location_name: free text location
    :return: the chosen Location or None when nothing matched
    """
    suggestions = search_locations(location_name)
    if not suggestions:
        return None
    if len(suggestions) == 1:
        return suggestions[0]
    click.secho('Select a location:', fg=Colors['Description'])
    for x, s in enumerate(suggestions, start=1):
        click.echo(f'{x}: {format_location_string(s)}')
    choice = click.prompt(_prompt('Which one?'), type=click.IntRange(1, len(suggestions)), default=1)
    return suggestions[choice - 1]


@click.command('main')
@click.argument('location', required=False)
@click.option('--hours', default=config.DEFAULT_HORIZON, type=click.IntRange(min=0),
              help='number of hours ahead to look for the most dramatic change')
@click.option('--flip', is_flag=True, help='show the hourly graph side of the cards')
@click.option('--seed', type=int, default=None, help='seed the phrase picker for repeatable output')
@click.option('--show-url', is_flag=True, help='print the forecast request URL')
@click.option('--verbose', '-v', is_flag=True, help='log debug messages')
def main(location, hours, flip, seed, show_url, verbose):
    """ Show the weather now and the biggest change coming up for a location """
    _setup_logging(verbose)
    click.secho(TITLE, fg=Colors['Title'])
    if not location:
        location = click.prompt(_prompt('Enter location'))

    chosen = choose_location(location)
    if chosen is None:
        click.secho(f'Sorry, could not find a location called {location}.', fg=Colors['Error'])
        sys.exit(1)
    click.secho(format_location_string(chosen), fg=Colors['Description'])

    client = Weather(horizon=hours)
    weather = client.get_weather(chosen)
    if show_url:
        click.secho(f'API URL: {client.last_request_url}', fg=Colors['Alternate_Output'])
    if weather is None:
        click.secho('Sorry, the weather service is not answering right now.', fg=Colors['Error'])
        sys.exit(1)

    click.secho(f'Now / Next {hours} hours', fg=Colors['Description'])
    cards = build_cards(weather, WeatherDescriptions(rng=_rng(seed)), horizon=hours)
    _echo_cards(cards, flip)


@click.command('describe')
@click.argument('metric', type=click.Choice(metric_names))
@click.argument('value', type=float)
@click.option('--seed', type=int, default=None, help='seed the phrase picker for repeatable output')
def describe(metric, value, seed):
    """ Describe a single reading, e.g. `describe temperature 72` """
    descriptions = WeatherDescriptions(rng=_rng(seed))
    phrase = descriptions.describe(metric, value)
    click.secho(f'{descriptions.format_raw_value(metric, value)}: {phrase}', fg=Colors['Output'])


@click.command('demo')
@click.option('--temp', default=70.0, help='current temperature (F)')
@click.option('--wind', default=5.0, help='current wind speed (mph)')
@click.option('--chance', default=10.0, help='current chance of rain (%)')
@click.option('--precip', default=0.0, help='current precipitation (in)')
@click.option('--cloud', default=20.0, help='current cloud cover (%)')
@click.option('--hours', default=config.DEFAULT_HORIZON, type=click.IntRange(min=0),
              help='number of hours of made-up forecast')
@click.option('--flip', is_flag=True, help='show the hourly graph side of the cards')
@click.option('--seed', type=int, default=None, help='seed the forecast and the phrases')
def demo_mode(temp, wind, chance, precip, cloud, hours, flip, seed):
    """
    Render the cards for the supplied readings with a random-walk forecast, no network needed
    """
    rng = random.Random(seed)
    current = {Metric.TEMPERATURE: temp, Metric.WIND_SPEED: wind, Metric.PRECIPITATION_CHANCE: chance,
               Metric.PRECIPITATION: precip, Metric.CLOUD_COVER: cloud}
    caps = {Metric.PRECIPITATION_CHANCE: 100.0, Metric.CLOUD_COVER: 100.0}
    steps = {Metric.TEMPERATURE: 3, Metric.WIND_SPEED: 3, Metric.PRECIPITATION_CHANCE: 10,
             Metric.PRECIPITATION: 0.05, Metric.CLOUD_COVER: 10}
    start = dt.datetime(NOW.year, NOW.month, NOW.day, NOW.hour) + dt.timedelta(hours=1)
    times = list(pd.date_range(start, periods=hours, freq='h'))
    descriptions = WeatherDescriptions(rng=rng)
    cards = []
    for card_id, metric in CARD_ORDER:
        value, series = current[metric], []
        for _ in range(hours):
            value = max(0.0, value + rng.uniform(-steps[metric], steps[metric]))
            value = min(value, caps.get(metric, value))
            series.append(round(value, 2))
        cards.append(build_card(metric, current[metric], series, times, descriptions, horizon=hours,
                                card_id=card_id))
    _echo_cards(cards, flip)


@click.group()
def cli():
    pass


cli.add_command(main)
cli.add_command(describe)
cli.add_command(demo_mode)


if __name__ == "__main__":
    sys.exit(main())  # pragma: no cover
