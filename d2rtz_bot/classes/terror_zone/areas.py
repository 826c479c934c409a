import json, os
from collections import namedtuple

AREAS_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "data", "areas.json")

AreaInfo = namedtuple("AreaInfo", ["name", "tier"])


def load_areas(path: str = AREAS_PATH, locale: str = "zh-cn"):
    """Build the zone id -> AreaInfo table from the bundled area records."""
    with open(path, "r", encoding="utf-8") as areas_file:
        raw_areas = json.load(areas_file)
    areas = {}
    for area in raw_areas:
        areas[int(area["id"])] = AreaInfo(name=area["name"][locale], tier=area["tier-loot"])
    return areas


AREAS = load_areas()
