import configparser
import os

# --- SETTINGS ---
config_file_path = os.environ.get('PRIME_RSS_CONFIG', 'config.ini')

config = configparser.ConfigParser()
config['SETTINGS'] = {
    'page_load_timeout': '30',
    'element_wait_timeout': '30',
    'short_element_wait': '5',
    'scroll_settle_seconds': '2',
    'output_path': os.path.join('docs', 'games.rss'),
    'log_file': 'scraper.log',
}

# Values from the file override the defaults above; a missing file is fine.
config.read(config_file_path, encoding='utf-8')

PAGE_LOAD_TIMEOUT = config['SETTINGS'].getint('page_load_timeout', 30)
ELEMENT_WAIT_TIMEOUT = config['SETTINGS'].getint('element_wait_timeout', 30)
SHORT_ELEMENT_WAIT = config['SETTINGS'].getfloat('short_element_wait', 5)
SCROLL_SETTLE_SECONDS = config['SETTINGS'].getfloat('scroll_settle_seconds', 2)
OUTPUT_PATH = config['SETTINGS'].get('output_path')
LOG_FILE = config['SETTINGS'].get('log_file')

# Browser locations, same variables the deployment image exports
CHROME_BIN = os.environ.get('CHROME_BIN')
CHROMEDRIVER_PATH = os.environ.get('CHROMEDRIVER_PATH')
