from __future__ import annotations

import logging

import requests

from ..services.errors import FetchError
from ..services.progress import DownloadProgress

"""HTTP fetcher for the yearly FMI heating degree-day CSV.

Data source: https://www.fmi.fi (Finnish Meteorological Institute)

One GET per call, no retries, no caching. Any transport failure or non-2xx
response becomes a FetchError carrying the transport's own message.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_SOURCE_URL",
    "CsvFetcher",
]

DEFAULT_SOURCE_URL = (
    "http://cdn.fmi.fi/weather-observations/products/heating-degree-days/"
    "lammitystarveluvut-{year}.utf8.csv"
)

_CHUNK_SIZE = 16 * 1024


class CsvFetcher:
    """Fetch one year's CSV text from a year-templated URL.

    Args:
        source_url: URL template containing ``{year}``
        timeout: Seconds passed to requests; None keeps the transport default
        encoding: Text encoding of the response body
        session: Optional requests.Session (tests inject a mock)
        show_progress: Display a TTY download bar while streaming
    """

    def __init__(
        self,
        source_url: str = DEFAULT_SOURCE_URL,
        timeout: float | None = None,
        encoding: str = "utf-8",
        session: requests.Session | None = None,
        show_progress: bool = False,
    ) -> None:
        if "{year}" not in source_url:
            raise ValueError(f"source_url must contain '{{year}}': {source_url}")
        self.source_url = source_url
        self.timeout = timeout
        self.encoding = encoding
        self.session = session if session is not None else requests.Session()
        self.show_progress = show_progress

    def url_for(self, year: int) -> str:
        return self.source_url.format(year=year)

    def fetch(self, year: int) -> str:
        """Return the CSV body for ``year`` as text.

        Raises:
            FetchError: connection error, timeout, or non-success status
        """
        url = self.url_for(year)
        logger.debug("GET %s", url)
        try:
            # closing the response returns a streamed connection to the pool
            with self.session.get(url, timeout=self.timeout, stream=self.show_progress) as resp:
                resp.raise_for_status()
                if self.show_progress:
                    body = self._read_streamed(resp, year)
                else:
                    body = resp.content
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FetchError(str(e), status_code=status) from e
        except requests.RequestException as e:
            raise FetchError(str(e)) from e

        try:
            text = body.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise FetchError(f"response is not valid {self.encoding}: {e}") from e
        logger.info("Fetched %d bytes for year=%d", len(body), year)
        return text

    def _read_streamed(self, resp: requests.Response, year: int) -> bytes:
        length = resp.headers.get("Content-Length")
        total = int(length) if length and length.isdigit() else None
        chunks: list[bytes] = []
        with DownloadProgress(total, description=f"Fetching {year}") as progress:
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                if chunk:
                    chunks.append(chunk)
                    progress.advance(len(chunk))
        return b"".join(chunks)
