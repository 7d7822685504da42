"""Named constants for the news import package.

Selectors and limits for the pon.org.ua markup live here so they can be
tuned from one place.
"""

# ---------------------------------------------------------------------------
# Source site
# ---------------------------------------------------------------------------
SOURCE_URL = "https://pon.org.ua/novyny/"
SOURCE_ORIGIN = "https://pon.org.ua"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
ACCEPT_HEADER = "text/html,application/xhtml+xml"

# ---------------------------------------------------------------------------
# Link discovery
# ---------------------------------------------------------------------------
MAX_SCRAPED_LINKS = 10
PRIMARY_LINK_SELECTOR = "div#news .ntitle a, #news .ntitle a"
FALLBACK_LINK_SELECTOR = (
    "article a, .post-title a, .entry-title a, .news-item a, .story a"
)
PREVIEW_BLOCK_SELECTOR = ".nblock, .news-block, .newsblock, div"
MIN_FALLBACK_TITLE_LENGTH = 10

# ---------------------------------------------------------------------------
# Article pages
# ---------------------------------------------------------------------------
TITLE_SELECTORS = ("h1", ".post-title", ".entry-title", "article h1")
DATE_SELECTOR = "time, .post-date, .entry-date, .published, .date"
BODY_CONTAINER_SELECTOR = (
    ".fullstory, .full-story, .post-content, .entry-content, article"
)

# Images with an explicit width or height below this are icons/spacers
MIN_IMAGE_DIMENSION = 50
DEFAULT_IMAGE_DIMENSION = 100

# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------
DEFAULT_CATEGORY_NAME = "Новини"
SUMMARY_MAX_LENGTH = 200
