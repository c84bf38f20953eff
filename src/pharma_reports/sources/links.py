"""Deep-link construction and alternative search suggestions."""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from pharma_reports.core.app_config import SourceCatalogConfig, get_app_config_or_default
from pharma_reports.sources.domains import get_hostname, match_domain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlternativeStrategy:
    """Another way to reach a cited section when the deep link fails."""

    type: str
    description: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _fallback_deep_link(base_url: str, fragment: str | None, param: str) -> str:
    """Plain string construction for URLs that do not parse."""
    base, _, existing_fragment = base_url.partition("#")
    base += ("&" if "?" in base else "?") + f"{param}=true"
    target = fragment or existing_fragment
    if target:
        base += f"#{target}"
    return base


def build_deep_link(
    base_url: Any,
    fragment: str | None = None,
    *,
    timestamp_ms: int | None = None,
    catalog: SourceCatalogConfig | None = None,
) -> str:
    """Build a URL that opens ``base_url`` at section ``fragment``.

    The fragment becomes the URL hash; a ``highlight=true`` marker and a
    millisecond timestamp cache-buster are added to the query string.
    URLs that fail to parse fall back to string concatenation, so a usable
    link is always returned.

    Args:
        base_url: Source URL, with or without its own fragment.
        fragment: Section identifier; keeps the URL's own hash when empty.
        timestamp_ms: Cache-busting value; defaults to the current time.
        catalog: Domain catalog carrying the marker parameter names.

    Example:
        build_deep_link("https://pubmed.ncbi.nlm.nih.gov/12345678/", "abstract")
        → "https://pubmed.ncbi.nlm.nih.gov/12345678/?highlight=true&_t=1718...#abstract"
    """
    cfg = catalog or get_app_config_or_default().sources
    url = base_url.strip() if isinstance(base_url, str) else ""
    fragment = fragment or None

    if get_hostname(url) is None:
        logger.debug("Deep link fallback for unparsable URL %r", url)
        return _fallback_deep_link(url, fragment, cfg.highlight_param)

    stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    parts = urlsplit(url)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in (cfg.highlight_param, cfg.cache_bust_param)
    ]
    query.append((cfg.highlight_param, "true"))
    query.append((cfg.cache_bust_param, str(stamp)))

    return urlunsplit(
        (
            parts.scheme,
            parts.netloc,
            parts.path,
            urlencode(query),
            fragment if fragment is not None else parts.fragment,
        )
    )


def suggest_alternatives(
    url: Any,
    fragment: str | None = None,
    catalog: SourceCatalogConfig | None = None,
) -> list[AlternativeStrategy]:
    """Suggest searches that reach the cited information another way.

    Known sites get a same-site search for the fragment; a web search
    scoped to the URL's domain is always appended. Invalid URLs yield [].
    """
    hostname = get_hostname(url)
    if hostname is None:
        return []

    cfg = catalog or get_app_config_or_default().sources
    term = fragment or ""
    strategies: list[AlternativeStrategy] = []

    by_domain = {search.domain.lower(): search for search in cfg.site_searches}
    matched = match_domain(hostname, by_domain)
    if matched is not None:
        search = by_domain[matched]
        strategies.append(
            AlternativeStrategy(
                type="search",
                description=search.description,
                url=search.url_template.format(query=quote(term, safe="")),
            )
        )

    web_query = f"{term} site:{hostname}".strip()
    strategies.append(
        AlternativeStrategy(
            type="web",
            description=cfg.web_search_description,
            url=cfg.web_search_url.format(query=quote(web_query, safe="")),
        )
    )
    return strategies
