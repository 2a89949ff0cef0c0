# -*- coding: utf-8 -*-
"""
x轴上的命名区域，以及每个区域对应的状态消息。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List

from config.settings import ZONE_THRESHOLDS


class Zone(Enum):
    MT_STUPID = "Mt. Stupid"
    VALLEY_OF_DESPAIR = "Valley of Despair"
    SLOPE_OF_ENLIGHTENMENT = "Slope of Enlightenment"
    PLATEAU_OF_SUSTAINABILITY = "Plateau of Sustainability"

    @property
    def label(self) -> str:
        return self.value


ZONES_IN_ORDER: List[Zone] = list(Zone)


@dataclass(frozen=True)
class ZoneBand:
    upper: float  # 不含上界，最后一段除外
    zone: Zone
    template: str

    def message(self, name: str) -> str:
        return self.template.format(name=name)


ZONE_BANDS: List[ZoneBand] = [
    ZoneBand(0.06, Zone.MT_STUPID, "{name} just discovered the topic exists."),
    ZoneBand(0.15, Zone.MT_STUPID, "{name} is climbing Mt. Stupid with zero doubts."),
    ZoneBand(0.25, Zone.MT_STUPID, "{name} is starting to suspect there's more to it."),
    ZoneBand(0.33, Zone.VALLEY_OF_DESPAIR, "{name} is sliding into the Valley of Despair."),
    ZoneBand(0.42, Zone.VALLEY_OF_DESPAIR, "{name} has hit rock bottom. It gets better."),
    ZoneBand(0.48, Zone.VALLEY_OF_DESPAIR, "{name} is climbing out of the valley."),
    ZoneBand(0.57, Zone.SLOPE_OF_ENLIGHTENMENT, "{name} is starting to get it."),
    ZoneBand(0.66, Zone.SLOPE_OF_ENLIGHTENMENT, "{name} knows what they don't know."),
    ZoneBand(0.75, Zone.SLOPE_OF_ENLIGHTENMENT, "{name} is gaining real confidence."),
    ZoneBand(0.85, Zone.PLATEAU_OF_SUSTAINABILITY, "{name} has reached the Plateau of Sustainability."),
    ZoneBand(0.95, Zone.PLATEAU_OF_SUSTAINABILITY, "{name} is a seasoned expert."),
    ZoneBand(1.00, Zone.PLATEAU_OF_SUSTAINABILITY, "{name} has achieved true mastery."),
]


def _clamp(x: float) -> float:
    if x != x:  # NaN
        return 0.0
    return max(0.0, min(1.0, float(x)))


def zone_for(x: float) -> Zone:
    x = _clamp(x)
    for threshold, zone in zip(ZONE_THRESHOLDS, ZONES_IN_ORDER):
        if x < threshold:
            return zone
    return ZONES_IN_ORDER[-1]


def band_for(x: float) -> ZoneBand:
    x = _clamp(x)
    for band in ZONE_BANDS:
        if x < band.upper:
            return band
    return ZONE_BANDS[-1]


def message_for(name: str, x: float) -> str:
    return band_for(x).message(name)
