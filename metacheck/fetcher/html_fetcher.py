"""HTML and site-file fetching with SSRF protection."""
from __future__ import annotations

import logging
import socket
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from ipaddress import ip_address
from urllib.parse import urljoin, urlparse

import requests

from metacheck.config.settings import settings
from metacheck.logging_utils import sanitize_url_for_logging, truncate

logger = logging.getLogger(__name__)

SITE_FILES = ("robots.txt", "llms.txt")

SSRF_ERROR_PREFIX = "Access to private/internal IP addresses is forbidden"


@dataclass
class FetchResult:
    """A fetched document and how it was reached."""
    html: str
    final_url: str
    status_code: int
    content_type: str
    redirect_chain: list[dict] = field(default_factory=list)
    timing_ms: int = 0


def _is_url(source: str) -> bool:
    parsed = urlparse(source)
    return parsed.scheme in {"http", "https"}


def _origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def _validate_ip(ip_str: str) -> tuple[bool, str]:
    """Check if an IP address is safe (not private/internal)."""
    try:
        ip = ip_address(ip_str)
        if (
            ip.is_private
            or ip.is_loopback
            or ip.is_reserved
            or ip.is_link_local
            or ip.is_multicast
            or ip.is_unspecified
        ):
            return False, f"{SSRF_ERROR_PREFIX}: {ip_str}"
        return True, ""
    except ValueError:
        return False, f"Invalid IP address: {ip_str}"


def validate_url(url: str) -> str:
    """Validate a URL for fetching and return an error message ("" if safe).

    Resolves the hostname and rejects private, loopback, reserved and
    link-local targets. There is a small TOCTOU window between this check and
    the request; DNS rebinding needs attacker-controlled DNS.
    """
    if not url or not url.strip():
        return "URL is required"

    if len(url) > settings.fetcher.max_url_length:
        return f"URL exceeds maximum length of {settings.fetcher.max_url_length} characters"

    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"}:
        return "Only http and https schemes are allowed"

    hostname = parsed.hostname
    if not hostname:
        return "Invalid URL: hostname not found"

    try:
        addresses = {info[4][0] for info in socket.getaddrinfo(hostname, None)}
    except (socket.gaierror, UnicodeError):
        return f"Could not resolve hostname: {hostname}"

    for address in sorted(addresses):
        is_safe, error_msg = _validate_ip(address)
        if not is_safe:
            return error_msg

    return ""


def _get(url: str, timeout: int) -> requests.Response:
    return requests.get(
        url,
        timeout=timeout,
        allow_redirects=False,  # Redirect targets are validated one by one
        stream=True,
        headers={"User-Agent": settings.fetcher.user_agent},
    )


def _check_content_length(response: requests.Response) -> None:
    max_size = settings.fetcher.max_response_size
    content_length = response.headers.get("Content-Length")
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        response.close()
        raise ValueError(f"Response too large: {int(content_length)} bytes (max {max_size})")


def _read_text(response: requests.Response) -> str:
    """Read the body with a size limit (for responses without Content-Length)."""
    max_size = settings.fetcher.max_response_size
    chunks = []
    total_size = 0
    for chunk in response.iter_content(chunk_size=8192, decode_unicode=False):
        total_size += len(chunk)
        if total_size > max_size:
            response.close()
            raise ValueError(f"Response too large: exceeded {max_size} bytes")
        chunks.append(chunk)

    content_bytes = b"".join(chunks)
    encoding = response.encoding or "utf-8"
    try:
        return content_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return content_bytes.decode("utf-8", errors="replace")


def fetch_html(url: str) -> FetchResult:
    """Fetch a document from a URL.

    Security measures:
    - Only accepts http/https URLs (no local file paths)
    - Validates resolved IPs are not private/internal (SSRF protection)
    - Follows redirects manually, re-validating every target
    - Limits response size to prevent memory exhaustion

    Raises:
        ValueError: URL rejected or response too large
        requests.RequestException: Network failure or HTTP error status
    """
    start = time.monotonic()

    error_msg = validate_url(url)
    if error_msg:
        logger.warning("Fetch blocked for %s: %s", sanitize_url_for_logging(url), error_msg)
        raise ValueError(f"SSRF protection: {error_msg}")

    current_url = url
    redirect_chain: list[dict] = []
    timeout = settings.fetcher.request_timeout

    try:
        response = _get(current_url, timeout)
        _check_content_length(response)

        while response.is_redirect and len(redirect_chain) < settings.fetcher.max_redirects:
            location = response.headers.get("Location", "")
            if not location:
                break

            next_url = urljoin(current_url, location)
            redirect_chain.append({"status": response.status_code, "from": current_url, "to": next_url})

            redirect_error = validate_url(next_url)
            if redirect_error:
                response.close()
                raise ValueError(f"SSRF protection: Redirect blocked - {redirect_error}")

            response.close()
            current_url = next_url
            response = _get(current_url, timeout)
            _check_content_length(response)

        response.raise_for_status()
        html = _read_text(response)
    except (ValueError, requests.RequestException) as exc:
        logger.warning(
            "Fetch failed for %s: %s", sanitize_url_for_logging(url), truncate(str(exc), 500)
        )
        raise

    timing_ms = int((time.monotonic() - start) * 1000)
    logger.info(
        "Fetched %s (%d, %d bytes, %d redirects, %dms)",
        sanitize_url_for_logging(current_url),
        response.status_code,
        len(html),
        len(redirect_chain),
        timing_ms,
    )

    return FetchResult(
        html=html,
        final_url=current_url,
        status_code=response.status_code,
        content_type=response.headers.get("Content-Type", "text/html"),
        redirect_chain=redirect_chain,
        timing_ms=timing_ms,
    )


def fetch_site_file(url: str, name: str) -> str | None:
    """Fetch ``{origin}/{name}`` for the site of ``url``.

    Redirects are followed up to ``max_redirects`` hops, validating every
    target. Returns None when the file is missing, the request fails, or a
    target is rejected; a missing site file is not an error.
    """
    if not _is_url(url):
        return None

    target = f"{_origin(url)}/{name}"
    if validate_url(target):
        return None

    timeout = settings.fetcher.site_file_timeout
    try:
        response = _get(target, timeout)
        hops = 0
        while response.is_redirect and hops < settings.fetcher.max_redirects:
            location = response.headers.get("Location", "")
            if not location:
                break
            next_url = urljoin(target, location)
            response.close()
            redirect_error = validate_url(next_url)
            if redirect_error:
                logger.debug("Redirect from %s blocked: %s", target, redirect_error)
                return None
            target = next_url
            hops += 1
            response = _get(target, timeout)

        if response.status_code != 200:
            response.close()
            logger.debug("%s returned HTTP %d", target, response.status_code)
            return None
        _check_content_length(response)
        return _read_text(response)
    except (ValueError, requests.RequestException) as exc:
        logger.debug("Could not fetch %s: %s", target, exc)
        return None


def fetch_site_files(url: str) -> tuple[str | None, str | None]:
    """Fetch robots.txt and llms.txt for the site of ``url`` in parallel."""
    with ThreadPoolExecutor(max_workers=len(SITE_FILES)) as executor:
        robots_future = executor.submit(fetch_site_file, url, "robots.txt")
        llms_future = executor.submit(fetch_site_file, url, "llms.txt")
        return robots_future.result(), llms_future.result()
