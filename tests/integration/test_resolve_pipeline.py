from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from degreedays.cli import main as cli_main
from degreedays.logging.init import reset_logging
from degreedays.models.heating_record import HeatingQuery
from degreedays.services.resolver import DataResolver
from degreedays.services.session import ViewSession
from degreedays.source.fetcher import CsvFetcher

"""End-to-end: HTTP response bytes -> CsvFetcher -> parser -> resolver -> view.

Only the requests.Session is mocked; everything else runs for real.
"""


def _session_for(body: bytes) -> MagicMock:
    resp = MagicMock()
    resp.content = body
    resp.headers = {"Content-Length": str(len(body))}
    resp.raise_for_status.return_value = None
    resp.__enter__.return_value = resp
    session = MagicMock()
    session.get.return_value = resp
    return session


def test_pipeline_with_bom_prefixed_utf8(sample_csv: str):
    body = ("\ufeff" + sample_csv).encode("utf-8")
    session = _session_for(body)
    fetcher = CsvFetcher("https://example.invalid/lammitystarveluvut-{year}.utf8.csv", session=session)
    view = ViewSession(DataResolver(fetcher), years=[2020, 2019])

    state = asyncio.run(view.refresh(HeatingQuery(2019, 11, "jyväskylä")))

    assert state.displayable
    assert state.heating_data is not None
    assert state.heating_data.location == "Jyväskylä"
    assert state.heating_data.heating_requirement == "150"
    assert state.heating_data.month_label == "December 2019"
    assert state.locations[0] == "Vantaa"
    session.get.assert_called_once_with(
        "https://example.invalid/lammitystarveluvut-2019.utf8.csv", timeout=None, stream=False
    )


def test_pipeline_http_404_surfaces_fetch_error():
    resp = MagicMock()
    resp.status_code = 404
    resp.raise_for_status.side_effect = requests.HTTPError("404 Client Error: Not Found", response=resp)
    resp.__enter__.return_value = resp
    session = MagicMock()
    session.get.return_value = resp
    view = ViewSession(DataResolver(CsvFetcher(session=session)), years=[2030])

    state = asyncio.run(view.refresh(HeatingQuery(2030, 0, "Vantaa")))

    assert not state.displayable
    assert state.error == "Error fetching data: 404 Client Error: Not Found"
    assert state.locations == ("Vantaa",)


def test_cli_end_to_end_with_mocked_session(temp_workdir: Path, sample_csv: str, capsys):
    reset_logging()
    session = _session_for(sample_csv.encode("utf-8"))
    year = date.today().year

    with patch("degreedays.source.fetcher.requests.Session", return_value=session), \
         patch("degreedays.cli.__main__.is_tty_enabled", return_value=False):
        code = cli_main(["--year", str(year), "--month", "XII", "--location", "Helsinki"])

    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Helsinki, Kaisaniemi" in out
    assert "INFO Heating Requirement: 105 degree-days" in out
    assert f"INFO Fetched {len(sample_csv.encode('utf-8'))} bytes for year={year}" in out
    assert f"SUMMARY year={year} month=XII location=Helsinki status=ok value=105" in out
