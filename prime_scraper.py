import json
import logging
import re
import time
from datetime import datetime, timezone
from urllib.parse import urljoin

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from config import (
    CHROME_BIN,
    CHROMEDRIVER_PATH,
    ELEMENT_WAIT_TIMEOUT,
    PAGE_LOAD_TIMEOUT,
    SCROLL_SETTLE_SECONDS,
    SHORT_ELEMENT_WAIT,
)
from models import (
    BASE_URL,
    OFFER_URL,
    ContentNotReady,
    MissingTitle,
    NavigationTimeout,
    Offer,
    OfferDuration,
    OfferPlatform,
    OfferSource,
    OfferType,
)

# --- PAGE MARKERS ---
CONTENT_SELECTOR = '.offer-list__content'
GAMES_FILTER_SELECTOR = 'button[data-a-target="offer-filter-button-Game"]'
OFFER_CARD_SELECTOR = '[data-a-target="offer-list-FGWP_FULL"] .item-card__action > a:first-child'
TITLE_SELECTOR = '.item-card-details__body__primary h3'

# Tried in order, first hit with a src wins
IMAGE_LOCATORS = [
    (By.CSS_SELECTOR, '[data-a-target="card-image"] img'),
    (By.TAG_NAME, 'img'),
]

# --- TITLE CLEANUP ---
TITLE_NOISE_PATTERNS = [
    re.compile(r'\[\s*(prime\s*gaming|prime|free|pc|new)\s*\]', re.IGNORECASE),
    re.compile(r'\(\s*(free\s*with\s*prime|prime\s*gaming|prime|free|pc)\s*\)', re.IGNORECASE),
    re.compile(r'^\s*(new|free\s*game)\b\s*(:|\s[-|]\s)\s*', re.IGNORECASE),
    re.compile(r'\s*[-–|]\s*(free\s*with\s*prime|claim\s*now|prime\s*gaming)\s*$', re.IGNORECASE),
]


def clean_game_title(raw_title):
    """
    Turns a heading scraped from an offer card into a plain game name.

    The cleanup is repeated until nothing changes, so feeding the result back
    in returns the same string.
    """
    if not raw_title:
        return ""
    cleaned = raw_title
    while True:
        previous = cleaned
        cleaned = re.sub(r'[ \t\r\n]+', ' ', cleaned)
        for pattern in TITLE_NOISE_PATTERNS:
            cleaned = pattern.sub('', cleaned)
        cleaned = re.sub(r'\s+', ' ', cleaned).strip()
        if cleaned == previous:
            return cleaned


def resolve_url(path):
    """Prefixes relative card links with the site origin; absolute links pass through."""
    return urljoin(BASE_URL, path.strip())


# --- OFFER EXTRACTION ---
def read_title(card):
    try:
        title = card.find_element(By.CSS_SELECTOR, TITLE_SELECTOR).get_attribute('textContent')
    except WebDriverException as e:
        raise MissingTitle(f"Couldn't find title: {e.__class__.__name__}") from e
    if not title or not title.strip():
        raise MissingTitle("Couldn't find title")
    return title


def read_image_url(card, wait=None):
    if wait is None:
        wait = SHORT_ELEMENT_WAIT
    for locator in IMAGE_LOCATORS:
        try:
            image = WebDriverWait(card, wait).until(EC.presence_of_element_located(locator))
            src = image.get_attribute('src')
        except WebDriverException:
            logging.debug(f"Image locator {locator[1]!r} gave nothing, trying the next one.")
            continue
        if src:
            return src
    return ""


def read_detail_url(card, title):
    try:
        path = card.get_dom_attribute('href')
    except WebDriverException as e:
        logging.warning(f"Couldn't read detail page link for '{title}': {e.__class__.__name__}")
        path = None
    if not path or not path.strip():
        logging.warning(f"Couldn't find detail page for '{title}', using {OFFER_URL}")
        return OFFER_URL
    return resolve_url(path)


def read_offer(card, wait=None):
    raw_title = read_title(card)
    title = clean_game_title(raw_title)
    if not title:
        raise MissingTitle(f"Title {raw_title!r} is empty after cleanup")

    img_url = read_image_url(card, wait)
    url = read_detail_url(card, title)

    # Expiry is not read: the list view doesn't show it and most games are permanent.
    now = datetime.now(timezone.utc)
    return Offer(
        source=OfferSource.AMAZON,
        duration=OfferDuration.CLAIMABLE,
        type=OfferType.GAME,
        platform=OfferPlatform.PC,
        title=title,
        probable_game_name=title,
        seen_first=now,
        seen_last=now,
        valid_to=None,
        rawtext=json.dumps({'title': raw_title}),
        url=url,
        img_url=img_url,
    )


def collect_offers(page, wait=None):
    """
    Reads every offer card on an already loaded and scrolled page.

    A card that fails is logged and skipped; the rest are still collected
    in page order. Returns an empty list when nothing could be read.
    """
    if wait is None:
        wait = SHORT_ELEMENT_WAIT
    cards = page.find_elements(By.CSS_SELECTOR, OFFER_CARD_SELECTOR)
    logging.info(f"Found {len(cards)} offer cards.")
    offers = []
    for idx, card in enumerate(cards):
        try:
            offer = read_offer(card, wait)
        except MissingTitle as e:
            logging.warning(f"Skipping offer card {idx}: {e}")
            continue
        except Exception as e:
            logging.error(f"Failed to read offer card {idx}: {e}", exc_info=True)
            continue
        logging.info(f"Offer ({idx + 1}/{len(cards)}): {offer.title} -> {offer.url}")
        offers.append(offer)
    return offers


# --- BROWSER ---
def create_driver():
    options = webdriver.ChromeOptions()
    options.add_argument("--headless")
    options.add_argument("--disable-gpu")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--window-size=1920,1080")
    options.add_argument("--log-level=3")
    options.add_experimental_option('excludeSwitches', ['enable-logging'])
    if CHROME_BIN:
        options.binary_location = CHROME_BIN

    if CHROMEDRIVER_PATH:
        service = Service(CHROMEDRIVER_PATH)
    else:
        service = Service(ChromeDriverManager().install())
    driver = webdriver.Chrome(service=service, options=options)
    logging.info("Selenium Chrome driver started.")
    return driver


def open_offer_page(driver):
    driver.set_page_load_timeout(PAGE_LOAD_TIMEOUT)
    try:
        driver.get(OFFER_URL)
    except TimeoutException as e:
        raise NavigationTimeout(f"{OFFER_URL} did not load within {PAGE_LOAD_TIMEOUT}s") from e

    try:
        WebDriverWait(driver, ELEMENT_WAIT_TIMEOUT).until(
            EC.presence_of_element_located((By.CSS_SELECTOR, CONTENT_SELECTOR))
        )
    except TimeoutException as e:
        raise ContentNotReady(f"'{CONTENT_SELECTOR}' did not appear within {ELEMENT_WAIT_TIMEOUT}s") from e
    logging.info("Offer list loaded.")

    games_tab = WebDriverWait(driver, ELEMENT_WAIT_TIMEOUT).until(
        EC.element_to_be_clickable((By.CSS_SELECTOR, GAMES_FILTER_SELECTOR))
    )
    games_tab.click()
    logging.info("Switched to the Games filter.")


def scroll_to_bottom(driver):
    driver.execute_script(
        "const el = document.documentElement; el.scrollTop = el.scrollHeight;"
    )
    # lazy-loaded cards need a moment to render
    time.sleep(SCROLL_SETTLE_SECONDS)


def read_offers():
    """Runs one browser session against the offer page and returns the offers found."""
    logging.info("--- Starting Prime Gaming scrape ---")
    driver = create_driver()
    try:
        open_offer_page(driver)
        scroll_to_bottom(driver)
        return collect_offers(driver)
    finally:
        try:
            driver.quit()
            logging.info("Selenium Chrome driver closed.")
        except WebDriverException as e:
            logging.error(f"Failed to close the Selenium Chrome driver: {e}")
