from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from degreedays.services.errors import FetchError
from degreedays.source.fetcher import DEFAULT_SOURCE_URL, CsvFetcher


def _session_returning(body: bytes, headers: dict[str, str] | None = None) -> MagicMock:
    resp = MagicMock()
    resp.content = body
    resp.headers = headers or {}
    resp.raise_for_status.return_value = None
    resp.__enter__.return_value = resp
    session = MagicMock()
    session.get.return_value = resp
    return session


def test_default_url_template():
    fetcher = CsvFetcher(session=MagicMock())
    assert fetcher.url_for(2024) == (
        "http://cdn.fmi.fi/weather-observations/products/heating-degree-days/"
        "lammitystarveluvut-2024.utf8.csv"
    )
    assert "{year}" in DEFAULT_SOURCE_URL


def test_url_template_requires_year_placeholder():
    with pytest.raises(ValueError):
        CsvFetcher("https://example.invalid/data.csv", session=MagicMock())


def test_fetch_returns_decoded_text():
    session = _session_returning("Lämmitystarveluvut,I\nVantaa,120\n".encode("utf-8"))
    fetcher = CsvFetcher("https://example.invalid/{year}.csv", timeout=5.0, session=session)

    text = fetcher.fetch(2023)

    assert text.startswith("Lämmitystarveluvut")
    session.get.assert_called_once_with("https://example.invalid/2023.csv", timeout=5.0, stream=False)


def test_fetch_without_timeout_uses_transport_default():
    session = _session_returning(b"a,b\n")
    CsvFetcher(session=session).fetch(2020)
    assert session.get.call_args.kwargs["timeout"] is None


def test_fetch_http_error_status():
    session = _session_returning(b"")
    resp = session.get.return_value
    resp.status_code = 404
    resp.raise_for_status.side_effect = requests.HTTPError(
        "404 Client Error: Not Found for url: https://example.invalid/1999.csv", response=resp
    )
    fetcher = CsvFetcher("https://example.invalid/{year}.csv", session=session)

    with pytest.raises(FetchError) as e:
        fetcher.fetch(1999)

    assert e.value.status_code == 404
    assert str(e.value) == "Error fetching data: 404 Client Error: Not Found for url: https://example.invalid/1999.csv"


def test_fetch_connection_error_message_preserved():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("Name or service not known")
    fetcher = CsvFetcher(session=session)

    with pytest.raises(FetchError) as e:
        fetcher.fetch(2024)

    assert e.value.detail == "Name or service not known"
    assert e.value.status_code is None


def test_fetch_timeout_is_fetch_error():
    session = MagicMock()
    session.get.side_effect = requests.Timeout("read timed out")
    with pytest.raises(FetchError, match="read timed out"):
        CsvFetcher(timeout=0.1, session=session).fetch(2024)


def test_fetch_invalid_encoding():
    session = _session_returning(b"\xff\xfe\xfa")
    with pytest.raises(FetchError, match="not valid utf-8"):
        CsvFetcher(session=session).fetch(2024)


def test_fetch_streamed_with_progress():
    session = _session_returning(b"", headers={"Content-Length": "6"})
    resp = session.get.return_value
    resp.iter_content.return_value = [b"abc", b"", b"def"]

    with patch("degreedays.services.progress.is_tty_enabled", return_value=False):
        fetcher = CsvFetcher("https://example.invalid/{year}.csv", session=session, show_progress=True)
        text = fetcher.fetch(2022)

    assert text == "abcdef"
    assert session.get.call_args.kwargs["stream"] is True


def test_fetch_streamed_updates_progress_bar():
    session = _session_returning(b"", headers={"Content-Length": "4"})
    session.get.return_value.iter_content.return_value = [b"ab", b"cd"]
    mock_pbar = MagicMock()

    with patch("degreedays.services.progress.is_tty_enabled", return_value=True), \
         patch("degreedays.services.progress.tqdm", return_value=mock_pbar) as mock_tqdm:
        CsvFetcher(session=session, show_progress=True).fetch(2021)

    assert mock_tqdm.call_args.kwargs["total"] == 4
    assert mock_pbar.update.call_count == 2
    mock_pbar.close.assert_called_once()


def test_fetch_closes_response_after_reading():
    session = _session_returning(b"a,b\n")
    CsvFetcher(session=session).fetch(2020)
    session.get.return_value.__exit__.assert_called_once()


def test_fetch_closes_streamed_response_on_http_error():
    session = _session_returning(b"")
    resp = session.get.return_value
    resp.status_code = 503
    resp.raise_for_status.side_effect = requests.HTTPError("503 Server Error", response=resp)

    with pytest.raises(FetchError):
        CsvFetcher(session=session, show_progress=True).fetch(2020)

    resp.__exit__.assert_called_once()
    resp.iter_content.assert_not_called()
