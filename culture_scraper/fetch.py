import codecs
from urllib.parse import urljoin

import requests
from urllib3.exceptions import ReadTimeoutError

from culture_scraper import config


class FetchError(Exception):
    """Base class for failures retrieving a calendar page."""


class NetworkError(FetchError):
    pass


class FetchTimeoutError(FetchError):
    pass


class RedirectLoopError(FetchError):
    pass


class ResponseTooLargeError(FetchError):
    pass


def _body_encoding(resp):
    """Declared charset if the server sent one, otherwise UTF-8."""
    content_type = resp.headers.get("Content-Type", "").lower()
    if "charset=" in content_type and resp.encoding:
        try:
            codecs.lookup(resp.encoding)
            return resp.encoding
        except LookupError:
            pass
    return "utf-8"


def _read_body(resp, max_bytes):
    chunks = []
    size = 0
    for chunk in resp.iter_content(chunk_size=65536):
        size += len(chunk)
        if max_bytes is not None and size > max_bytes:
            raise ResponseTooLargeError(f"Response from {resp.url} exceeded {max_bytes} bytes")
        chunks.append(chunk)
    return b"".join(chunks).decode(_body_encoding(resp), errors="replace")


def fetch(url, session=None, timeout=None, max_redirects=None, max_bytes=None):
    """
    GET a page and return its body as text.
    Redirects are followed by hand so the hop count can be bounded; a 3xx
    without a Location header is returned like any other response.
    Non-2xx responses are not treated as errors.
    """
    http = session or requests
    timeout = config.FETCH_TIMEOUT if timeout is None else timeout
    max_redirects = config.MAX_REDIRECTS if max_redirects is None else max_redirects
    max_bytes = config.MAX_RESPONSE_BYTES if max_bytes is None else max_bytes

    start_url = url
    hops = 0
    while True:
        try:
            resp = http.get(
                url,
                headers=config.FETCH_HEADERS,
                timeout=timeout,
                allow_redirects=False,
                stream=True,
            )
            try:
                location = resp.headers.get("Location")
                if 300 <= resp.status_code < 400 and location:
                    hops += 1
                    if hops > max_redirects:
                        raise RedirectLoopError(f"Too many redirects (>{max_redirects}) starting from {start_url}")
                    url = urljoin(url, location)
                    continue
                return _read_body(resp, max_bytes)
            finally:
                resp.close()
        except requests.exceptions.Timeout as e:
            raise FetchTimeoutError(f"Timed out after {timeout}s fetching {url}") from e
        except requests.exceptions.ConnectionError as e:
            # a stalled body read surfaces from iter_content as ConnectionError
            if e.args and isinstance(e.args[0], ReadTimeoutError):
                raise FetchTimeoutError(f"Timed out after {timeout}s reading {url}") from e
            raise NetworkError(f"{type(e).__name__}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{type(e).__name__}: {e}") from e
