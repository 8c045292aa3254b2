"""Escaping helpers for S3 resource paths and listing responses.

Path escaping is deliberately partial: only the characters S3 cannot accept
raw in a v2 resource path are percent-encoded, everything else (including
``/`` and non-ASCII text) goes through untouched.

Entity decoding only knows ``&quot;``, ``&amp;``, ``&lt;`` and ``&gt;``.
Numeric references such as ``&#38;`` are left as-is.
"""
import logging
import re
import xml.etree.ElementTree as ET

logger = logging.getLogger(__name__)

# '%' comes first so the escapes below it are not escaped twice
PATH_ESCAPES = [
    ('%', '%25'),
    (' ', '%20'),
    ('#', '%23'),
    ('$', '%24'),
    ('&', '%26'),
    ('+', '%2B'),
    (',', '%2C'),
    (':', '%3A'),
    (';', '%3B'),
    ('?', '%3F'),
    ('@', '%40'),
    ('\t', '%09'),
]

ENTITIES = {
    'quot': '"',
    'amp': '&',
    'lt': '<',
    'gt': '>',
}

_PATH_ESCAPE_MAP = dict(PATH_ESCAPES)
_PATH_UNESCAPE_MAP = {code: char for char, code in PATH_ESCAPES}
_PATH_UNESCAPE_RE = re.compile('|'.join(re.escape(code) for _, code in PATH_ESCAPES),
                               re.IGNORECASE)
_ENTITY_RE = re.compile(r'&(quot|amp|lt|gt);')


def escape_path(name: str) -> str:
    return ''.join(_PATH_ESCAPE_MAP.get(ch, ch) for ch in name)


def unescape_path(name: str) -> str:
    return _PATH_UNESCAPE_RE.sub(lambda m: _PATH_UNESCAPE_MAP[m.group(0).upper()], name)


def unescape_entities(text: str) -> str:
    # Single pass: the output of one replacement is never decoded again.
    return _ENTITY_RE.sub(lambda m: ENTITIES[m.group(1)], text)


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


def scrape_elements(body: str, tag: str) -> list:
    pattern = re.compile(f'<{re.escape(tag)}>(.*?)</{re.escape(tag)}>', re.DOTALL)
    return [unescape_entities(value) for value in pattern.findall(body)]


def extract_elements(body, tag: str) -> list:
    """Return the text of every ``tag`` element in ``body``, in document order.

    Namespaces are ignored. Bodies that are not well-formed XML are scraped
    with a plain ``<tag>...</tag>`` match instead.
    """
    if isinstance(body, bytes):
        body = body.decode('utf-8', errors='replace')
    if not body.strip():
        return []
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        logger.warning("Response is not well-formed XML (%s), scraping <%s> elements", e, tag)
        return scrape_elements(body, tag)
    return [el.text or '' for el in root.iter() if _local_name(el.tag) == tag]
