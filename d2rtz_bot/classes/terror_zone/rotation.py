import json, logging, os
from datetime import datetime, timedelta

import requests

from d2rtz_bot.classes.terror_zone.areas import AREAS
from d2rtz_bot.classes.terror_zone.errors import (
    AreaNotFoundError,
    MalformedDataError,
    TerrorZoneFetchError,
)
from d2rtz_bot.classes.relay.group_message import send_group_message

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.d2-trade.com/api/query/tz_online"
DEFAULT_CACHE_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "cache", "tz_online.json")
CACHE_MAX_AGE = timedelta(minutes=30)

REQUEST_HEADERS = {
    "accept": "application/json",
    "accept-language": "zh-CN,zh;q=0.9,en;q=0.8",
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-site",
    "Referer": "https://www.d2-trade.com/",
}


def is_cache_valid(cache_path: str, now: datetime = None) -> bool:
    """A cache file is reused only inside the hour it was written in, and for at most 30 minutes."""
    if not os.path.exists(cache_path):
        return False
    now = now or datetime.now()
    cache_time = datetime.fromtimestamp(os.path.getmtime(cache_path))
    same_hour = (now.year, now.month, now.day, now.hour) == (
        cache_time.year,
        cache_time.month,
        cache_time.day,
        cache_time.hour,
    )
    return same_hour and now - cache_time < CACHE_MAX_AGE


def fetch_tz_online(api_url: str = None, cache_path: str = None, now: datetime = None):
    cache_path = cache_path or DEFAULT_CACHE_PATH
    os.makedirs(os.path.dirname(os.path.abspath(cache_path)), exist_ok=True)

    if is_cache_valid(cache_path, now):
        logger.debug(f"Using cached terror zone rotation from {cache_path}")
        with open(cache_path, "r", encoding="utf-8") as cache_file:
            return json.load(cache_file)

    url = api_url or DEFAULT_API_URL
    logger.info(f"Fetching terror zone rotation from {url}")
    response = requests.get(url, headers=REQUEST_HEADERS)
    if not response.ok:
        raise TerrorZoneFetchError(f"HTTP error! status: {response.status_code}")

    data = response.json()
    with open(cache_path, "w", encoding="utf-8") as cache_file:
        json.dump(data, cache_file, indent=2, ensure_ascii=False)
    return data


def process_tz_online_data(data, areas: dict = None) -> str:
    """Render the current and next terror zones as a two-line status message."""
    areas = AREAS if areas is None else areas
    logger.debug(f"Received rotation data: {data}")

    entries = data.get("data") if isinstance(data, dict) else None
    if not isinstance(entries, list) or len(entries) < 2:
        raise MalformedDataError("Invalid data format")

    try:
        sorted_entries = sorted(entries, key=lambda entry: entry["time"])
        current_zone_id = int(sorted_entries[0]["zone"])
        next_zone_id = int(sorted_entries[1]["zone"])
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedDataError("Invalid data format") from e

    logger.debug(f"Current zone ID: {current_zone_id}, next zone ID: {next_zone_id}")

    current_area = areas.get(current_zone_id)
    if current_area is None:
        raise AreaNotFoundError(f"Area info not found for current zone: {current_zone_id}")
    next_area = areas.get(next_zone_id)
    if next_area is None:
        raise AreaNotFoundError(f"Area info not found for next zone: {next_zone_id}")

    return (
        f"TZ：{current_area.name}，掉落：{current_area.tier}\n"
        f"Next：{next_area.name}，掉落：{next_area.tier}"
    )


def get_tz_info(config) -> str:
    data = fetch_tz_online(config.get_tz_api_url(), config.get_tz_cache_path())
    return process_tz_online_data(data)


def announce_tz(config) -> str:
    """Post the current rotation to the configured group and return the posted text."""
    message = get_tz_info(config)
    logger.info(f"Announcing terror zone rotation:\n{message}")
    send_group_message(message, config)
    return message
