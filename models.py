import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

BASE_URL = "https://gaming.amazon.com"
OFFER_URL = f"{BASE_URL}/home"

PLACEHOLDER_TITLE = "No games available"


class OfferSource(str, Enum):
    AMAZON = "AMAZON"


class OfferDuration(str, Enum):
    CLAIMABLE = "CLAIMABLE"


class OfferPlatform(str, Enum):
    PC = "PC"


class OfferType(str, Enum):
    GAME = "GAME"


# --- ERRORS ---
class ScraperError(Exception):
    pass


class MissingTitle(ScraperError):
    """The card has no usable title; the card is skipped."""


class NavigationTimeout(ScraperError):
    """The offer page did not finish loading in time."""


class ContentNotReady(ScraperError):
    """The offer list never showed up on the loaded page."""


@dataclass(frozen=True)
class Offer:
    source: OfferSource
    duration: OfferDuration
    type: OfferType
    platform: OfferPlatform
    title: str
    probable_game_name: str
    seen_first: datetime
    seen_last: datetime
    valid_to: Optional[datetime]
    rawtext: str
    url: str
    img_url: str

    def to_dict(self):
        return {
            'source': self.source.value,
            'duration': self.duration.value,
            'type': self.type.value,
            'platform': self.platform.value,
            'title': self.title,
            'probable_game_name': self.probable_game_name,
            'seen_first': self.seen_first.isoformat(),
            'seen_last': self.seen_last.isoformat(),
            'valid_to': self.valid_to.isoformat() if self.valid_to else None,
            'rawtext': self.rawtext,
            'url': self.url,
            'img_url': self.img_url,
        }


def make_placeholder_offer(now=None):
    """Offer written to the feed when a run finds nothing, so the feed is never empty."""
    now = now or datetime.now(timezone.utc)
    return Offer(
        source=OfferSource.AMAZON,
        duration=OfferDuration.CLAIMABLE,
        type=OfferType.GAME,
        platform=OfferPlatform.PC,
        title=PLACEHOLDER_TITLE,
        probable_game_name=PLACEHOLDER_TITLE,
        seen_first=now,
        seen_last=now,
        valid_to=None,
        rawtext=json.dumps({'title': PLACEHOLDER_TITLE}),
        url=OFFER_URL,
        img_url='',
    )
