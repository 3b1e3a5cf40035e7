import logging
import os
import sys

from config import LOG_FILE, OUTPUT_PATH
from feed import create_rss_feed
from models import make_placeholder_offer
from prime_scraper import read_offers


def setup_logging():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )


def write_feed(rss_content, output_path):
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(rss_content)


def run(output_path=None):
    output_path = output_path or OUTPUT_PATH
    offers = read_offers()
    logging.info(f"Found {len(offers)} game offers")

    if not offers:
        logging.warning("No offers found, writing a placeholder entry")
        offers = [make_placeholder_offer()]

    rss_content = create_rss_feed(offers)
    write_feed(rss_content, output_path)
    logging.info(f"RSS feed written to {os.path.abspath(output_path)}")


def main():
    setup_logging()
    logging.info("Starting Prime Gaming RSS scraper...")
    try:
        run()
    except Exception as e:
        logging.critical(f"Scraping failed: {e}", exc_info=True)
        return 1
    logging.info("Scraping completed successfully!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
