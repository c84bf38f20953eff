"""Source domain classification against the static domain catalog.

Hostnames match a catalog domain when they equal it or are a subdomain of
it (``www.fda.gov`` and ``accessdata.fda.gov`` both match ``fda.gov``).
When several catalog domains match, the most specific one wins, so
``pubmed.ncbi.nlm.nih.gov`` is PubMed rather than NCBI.
"""

import logging
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any
from urllib.parse import urlsplit

from pharma_reports.core.app_config import SourceCatalogConfig, get_app_config_or_default

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = "Unknown Source"


@dataclass(frozen=True)
class DomainClassification:
    """Whether a URL's domain is authoritative, and how to label it."""

    is_authoritative: bool
    display_name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Accessibility:
    """Static accessibility guess for a source URL.

    ``type`` is one of ``accessible``, ``restricted``, ``redirect``,
    ``unknown`` or ``error``.
    """

    accessible: bool
    type: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def get_hostname(url: Any) -> str | None:
    """Return the lower-cased hostname of an absolute URL, or None if invalid."""
    if not isinstance(url, str) or not url.strip():
        return None
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError:
        logger.debug("Unparsable URL: %r", url)
        return None
    if not parts.scheme or not hostname:
        return None
    return hostname.lower()


def match_domain(hostname: str, domains: Iterable[str]) -> str | None:
    """Return the most specific catalog domain covering ``hostname``."""
    best: str | None = None
    for domain in domains:
        if hostname == domain or hostname.endswith("." + domain):
            if best is None or len(domain) > len(best):
                best = domain
    return best


def _catalog(catalog: SourceCatalogConfig | None) -> SourceCatalogConfig:
    return catalog or get_app_config_or_default().sources


def classify_domain(url: Any, catalog: SourceCatalogConfig | None = None) -> DomainClassification:
    """Classify a URL as authoritative or general and derive its display name.

    Examples:
        "https://www.fda.gov/drugs" → (True, "FDA")
        "https://www.example.org/a" → (False, "example.org")
        "not a url" → (False, "Unknown Source")
    """
    hostname = get_hostname(url)
    if hostname is None:
        return DomainClassification(is_authoritative=False, display_name=UNKNOWN_SOURCE)

    domains = _catalog(catalog).authoritative_domains
    matched = match_domain(hostname, domains)
    if matched is not None:
        return DomainClassification(is_authoritative=True, display_name=domains[matched])

    display = hostname[4:] if hostname.startswith("www.") else hostname
    return DomainClassification(is_authoritative=False, display_name=display)


def is_authoritative_source(url: Any, catalog: SourceCatalogConfig | None = None) -> bool:
    """Check if a URL belongs to a curated authoritative domain."""
    return classify_domain(url, catalog).is_authoritative


def get_source_display_name(url: Any, catalog: SourceCatalogConfig | None = None) -> str:
    """Get a human-readable source name for a URL."""
    return classify_domain(url, catalog).display_name


def check_accessibility(url: Any, catalog: SourceCatalogConfig | None = None) -> Accessibility:
    """Classify whether a source page is likely to open for the reader.

    Government and academic sites are generally open; a second list of
    subscription sites is marked restricted; generic corporate placeholders
    tend to redirect to a home page. Everything else is assumed reachable.
    """
    if not isinstance(url, str) or not url.strip():
        return Accessibility(accessible=False, type="error", reason="No URL provided")

    hostname = get_hostname(url)
    if hostname is None:
        return Accessibility(accessible=False, type="error", reason="Invalid URL format")

    cfg = _catalog(catalog)
    if match_domain(hostname, cfg.accessible_domains):
        return Accessibility(
            accessible=True,
            type="accessible",
            reason="Generally accessible government/academic site",
        )
    if match_domain(hostname, cfg.restricted_domains):
        return Accessibility(
            accessible=False,
            type="restricted",
            reason="May require authentication or subscription",
        )
    if match_domain(hostname, cfg.redirect_domains):
        return Accessibility(
            accessible=False,
            type="redirect",
            reason="Likely to redirect to home page",
        )
    return Accessibility(accessible=True, type="unknown", reason="Unknown accessibility status")


def is_highlighting_supported(url: Any, catalog: SourceCatalogConfig | None = None) -> bool:
    """Check if the source site is one whose sections we deep-link into."""
    hostname = get_hostname(url)
    if hostname is None:
        return False
    return match_domain(hostname, _catalog(catalog).highlighting_domains) is not None


def highlighting_instructions(url: Any, catalog: SourceCatalogConfig | None = None) -> str:
    """Explain to the reader what to expect when opening a deep link."""
    if not isinstance(url, str) or not url.strip():
        return "No URL provided"

    hostname = get_hostname(url)
    if hostname is None:
        return "Unable to determine highlighting support for this website."

    cfg = _catalog(catalog)
    if match_domain(hostname, cfg.auto_highlight_domains):
        name = classify_domain(url, cfg).display_name
        return (
            f"{name} supports automatic section highlighting. "
            "The relevant section will be highlighted when you visit the page."
        )
    return (
        "This website may not support automatic highlighting. "
        "You may need to manually search for the relevant section on the page."
    )
