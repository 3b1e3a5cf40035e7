from feedgen.feed import FeedGenerator

FEED_TITLE = 'Prime Gaming RSS Games'
FEED_DESCRIPTION = 'Awesome RSS Feeds about Prime Gaming games offers!'
SITE_URL = 'https://feuerlord2.github.io/PrimeGaming-RSS-Site/'
FEED_URL = 'https://feuerlord2.github.io/PrimeGaming-RSS-Site/games.rss'
EDITOR = 'DanielWinterEmsdetten+rss@gmail.com (Daniel Winter)'
LANGUAGE = 'en'


def create_rss_feed(offers):
    """Builds the RSS 2.0 document for a run, one item per offer in the given order."""
    fg = FeedGenerator()
    fg.title(FEED_TITLE)
    fg.description(FEED_DESCRIPTION)
    # feedgen keeps the last link() call as the channel <link>
    fg.link(href=FEED_URL, rel='self')
    fg.link(href=SITE_URL, rel='alternate')
    fg.managingEditor(EDITOR)
    fg.webMaster(EDITOR)
    fg.language(LANGUAGE)

    for offer in offers:
        # add_entry prepends by default
        fe = fg.add_entry(order='append')
        fe.title(offer.title)
        fe.description(offer.title)
        fe.link(href=offer.url)
        fe.guid(offer.url, permalink=True)
        fe.pubDate(offer.seen_first)

    return fg.rss_str(pretty=True).decode('utf-8')
