"""
URL helpers: relative path fixup, tracking parameter removal and domain keys.
"""

from __future__ import annotations

from typing import List
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# Tracking parameters stripped by clean_url.
# Source list: https://github.com/mpchadwick/tracking-query-params-registry
TRACKING_PARAMS: List[str] = [
    "fbclid",
    "gclid",
    "gclsrc",
    "utm_content",
    "utm_term",
    "utm_campaign",
    "utm_medium",
    "utm_source",
    "utm_id",
    "_ga",
    "mc_cid",
    "mc_eid",
    "_bta_tid",
    "_bta_c",
    "trk_contact",
    "trk_msg",
    "trk_module",
    "trk_sid",
    "gdfms",
    "gdftrk",
    "gdffi",
    "_ke",
    "redirect_log_mongo_id",
    "redirect_mongo_id",
    "sb_referer_host",
    "mkwid",
    "pcrid",
    "ef_id",
    "s_kwcid",
    "msclkid",
    "dm_i",
    "epik",
    "pk_campaign",
    "pk_kwd",
    "pk_keyword",
    "piwik_campaign",
    "piwik_kwd",
    "piwik_keyword",
    "mtm_campaign",
    "mtm_keyword",
    "mtm_source",
    "mtm_medium",
    "mtm_content",
    "mtm_cid",
    "mtm_group",
    "mtm_placement",
    "matomo_campaign",
    "matomo_keyword",
    "matomo_source",
    "matomo_medium",
    "matomo_content",
    "matomo_cid",
    "matomo_group",
    "matomo_placement",
    "hsa_cam",
    "hsa_grp",
    "hsa_mt",
    "hsa_src",
    "hsa_ad",
    "hsa_acc",
    "hsa_net",
    "hsa_kw",
    "hsa_tgt",
    "hsa_ver",
    "_branch_match_id",
    "mkevt",
    "mkcid",
    "mkrid",
    "campid",
    "toolid",
    "customid",
    "igshid",
    "si",
]


def fix_relative_path(base_url: str, path: str) -> str:
    """Resolve ``path`` against the scheme and host of ``base_url``.

    Absolute ``http(s)`` URLs and ``data:`` URIs are returned unchanged,
    protocol-relative paths (``//cdn.example.com/a.png``) inherit the scheme,
    and everything else is joined onto ``scheme://[user@]host``.
    """
    path = path.strip()

    if path.startswith("http") or path.startswith("data:"):
        return path

    parts = urlsplit(base_url)

    if path.startswith("//"):
        return f"{parts.scheme}:{path}" if parts.scheme else path

    prefix = f"{parts.scheme}:" if parts.scheme else ""
    if parts.netloc or parts.path:
        prefix += "//" + parts.netloc

    if parts.netloc and path and not path.startswith("/"):
        prefix += "/"

    return prefix + path


def origin(url: str) -> str:
    """Return ``scheme://host`` for ``url``."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def extract_domain(url: str) -> str:
    """Return the lowercased hostname of ``url`` with any leading ``www.`` removed.

    Bare hostnames (no scheme) are accepted as well.
    """
    candidate = url.strip()
    if "://" not in candidate:
        candidate = "//" + candidate
    host = (urlsplit(candidate).hostname or "").lower()
    return host[4:] if host.startswith("www.") else host


def is_url_valid(url: str) -> bool:
    """Check that ``url`` is an http(s) URL with a dotted hostname."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False

    if parts.scheme not in ("http", "https"):
        return False

    # Very basic host check, good enough to reject "http://" and "http://localhost-ish"
    host = parts.hostname or ""
    return bool(host) and "." in host


def clean_url(url: str) -> str:
    """Remove known tracking parameters from ``url``."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    query = parse_qsl(parts.query, keep_blank_values=True)
    kept = [(key, value) for key, value in query if key not in TRACKING_PARAMS]
    if len(kept) == len(query):
        return url

    kept.sort(key=lambda item: item[0])
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(kept), parts.fragment))
