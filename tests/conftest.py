import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from selenium.common.exceptions import NoSuchElementException

# Add project root to sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import prime_scraper
from models import Offer, OfferDuration, OfferPlatform, OfferSource, OfferType
from prime_scraper import CONTENT_SELECTOR, GAMES_FILTER_SELECTOR, OFFER_CARD_SELECTOR, TITLE_SELECTOR

PRIMARY_IMAGE_SELECTOR = '[data-a-target="card-image"] img'


class FakeElement:
    """Stands in for a Selenium WebElement; children are keyed by locator value."""

    def __init__(self, text=None, attrs=None, children=None):
        self.text_content = text
        self.attrs = attrs or {}
        self.children = children or {}
        self.clicked = False

    def find_element(self, by=None, value=None):
        child = self.children.get(value)
        if child is None or child == []:
            raise NoSuchElementException(f"Unable to locate element: {value}")
        return child[0] if isinstance(child, list) else child

    def find_elements(self, by=None, value=None):
        child = self.children.get(value, [])
        return list(child) if isinstance(child, list) else [child]

    def get_attribute(self, name):
        if name == 'textContent':
            return self.text_content
        return self.attrs.get(name)

    def get_dom_attribute(self, name):
        return self.attrs.get(name)

    def is_displayed(self):
        return True

    def is_enabled(self):
        return True

    def click(self):
        self.clicked = True


class FakeDriver(FakeElement):
    def __init__(self, cards=(), get_error=None, content_ready=True):
        children = {
            GAMES_FILTER_SELECTOR: FakeElement(),
            OFFER_CARD_SELECTOR: list(cards),
        }
        if content_ready:
            children[CONTENT_SELECTOR] = FakeElement()
        super().__init__(children=children)
        self.get_error = get_error
        self.visited = []
        self.scripts = []
        self.page_load_timeout = None
        self.quit_called = False

    @property
    def games_tab(self):
        return self.children[GAMES_FILTER_SELECTOR]

    def set_page_load_timeout(self, timeout):
        self.page_load_timeout = timeout

    def get(self, url):
        self.visited.append(url)
        if self.get_error:
            raise self.get_error

    def execute_script(self, script, *args):
        self.scripts.append(script)

    def quit(self):
        self.quit_called = True


def make_card(title=None, href=None, image=None, fallback_image=None):
    children = {}
    if title is not None:
        children[TITLE_SELECTOR] = FakeElement(text=title)
    if image is not None:
        children[PRIMARY_IMAGE_SELECTOR] = FakeElement(attrs={'src': image})
    if fallback_image is not None:
        children['img'] = FakeElement(attrs={'src': fallback_image})
    attrs = {'href': href} if href is not None else {}
    return FakeElement(attrs=attrs, children=children)


def make_offer(title, url, seen=None):
    seen = seen or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    return Offer(
        source=OfferSource.AMAZON,
        duration=OfferDuration.CLAIMABLE,
        type=OfferType.GAME,
        platform=OfferPlatform.PC,
        title=title,
        probable_game_name=title,
        seen_first=seen,
        seen_last=seen,
        valid_to=None,
        rawtext='{"title": "%s"}' % title,
        url=url,
        img_url='',
    )


@pytest.fixture
def fast_waits(monkeypatch):
    monkeypatch.setattr(prime_scraper, 'SHORT_ELEMENT_WAIT', 0)
    monkeypatch.setattr(prime_scraper, 'ELEMENT_WAIT_TIMEOUT', 0)
    monkeypatch.setattr(prime_scraper, 'SCROLL_SETTLE_SECONDS', 0)
