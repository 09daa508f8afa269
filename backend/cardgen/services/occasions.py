"""Occasion catalog: fixed prompt wording per celebratory theme."""
from types import MappingProxyType
from typing import Mapping, Optional

from cardgen.models.card import DEFAULT_OCCASION, OccasionConfig, OccasionSummary

FALLBACK_OCCASION = "general"


def _occasion(key: str, **fields: str) -> tuple[str, OccasionConfig]:
    return key, OccasionConfig(key=key, **fields)


OCCASION_CONFIGS: Mapping[str, OccasionConfig] = MappingProxyType(dict([
    _occasion(
        "christmas",
        name="Christmas",
        scene="magical snowy winter scene with Christmas trees, warm golden lights, falling snow, festive decorations",
        interior="cozy Christmas interior with fireplace, decorated tree, warm lighting, stockings",
        attire="festive winter clothing (sweater, scarf, Santa hat optional)",
        decorations="holly, ornaments, snowflakes, candy canes",
        default_title="Merry Christmas",
    ),
    _occasion(
        "birthday",
        name="Birthday",
        scene="festive celebration scene with colorful balloons, confetti, streamers, party decorations",
        interior="cheerful party setting with birthday cake, presents, colorful banners",
        attire="party attire with optional birthday hat",
        decorations="balloons, confetti, streamers, stars",
        default_title="Happy Birthday",
    ),
    _occasion(
        "valentines",
        name="Valentine's Day",
        scene="romantic setting with hearts, roses, soft pink and red colors, dreamy atmosphere",
        interior="romantic interior with roses, candles, hearts, soft lighting",
        attire="elegant romantic attire in red, pink, or white",
        decorations="hearts, roses, cupid arrows, ribbons",
        default_title="Happy Valentine's Day",
    ),
    _occasion(
        "thanksgiving",
        name="Thanksgiving",
        scene="warm autumn harvest scene with fall foliage, pumpkins, golden light, rustic charm",
        interior="cozy dining setting with harvest decorations, autumn colors, warm ambiance",
        attire="comfortable autumn attire in warm colors",
        decorations="autumn leaves, pumpkins, cornucopia, wheat",
        default_title="Happy Thanksgiving",
    ),
    _occasion(
        "newyear",
        name="New Year",
        scene="glamorous celebration scene with fireworks, sparklers, midnight sky, gold and silver accents",
        interior="elegant party setting with champagne, clock striking midnight, glittering decorations",
        attire="elegant party attire, festive accessories",
        decorations="fireworks, stars, clocks, champagne glasses, confetti",
        default_title="Happy New Year",
    ),
    _occasion(
        "easter",
        name="Easter",
        scene="bright spring garden with blooming flowers, Easter eggs, soft pastel colors, gentle sunshine",
        interior="cheerful spring interior with Easter basket, decorated eggs, spring flowers",
        attire="spring attire in pastel colors",
        decorations="Easter eggs, bunnies, spring flowers, butterflies",
        default_title="Happy Easter",
    ),
    _occasion(
        "hanukkah",
        name="Hanukkah",
        scene="warm celebration scene with menorah glow, blue and silver colors, Star of David, candlelight",
        interior="festive interior with lit menorah, dreidels, gelt, blue and white decorations",
        attire="elegant attire in blue, white, or silver",
        decorations="menorah, dreidels, Star of David, candles",
        default_title="Happy Hanukkah",
    ),
    _occasion(
        FALLBACK_OCCASION,
        name="Special Occasion",
        scene="beautiful celebratory scene with elegant decorations, warm lighting, festive atmosphere",
        interior="elegant interior with tasteful decorations, warm and inviting ambiance",
        attire="nice attire appropriate for a special occasion",
        decorations="elegant borders, stars, flourishes",
        default_title="Warm Wishes",
    ),
]))


def lookup(key: Optional[str] = DEFAULT_OCCASION) -> OccasionConfig:
    """Return the config for ``key``, or the "general" entry for unknown keys."""
    return OCCASION_CONFIGS.get(key or "", OCCASION_CONFIGS[FALLBACK_OCCASION])


def available_occasions() -> list[OccasionSummary]:
    """List every occasion in catalog order."""
    return [
        OccasionSummary(key=cfg.key, name=cfg.name, default_title=cfg.default_title)
        for cfg in OCCASION_CONFIGS.values()
    ]
