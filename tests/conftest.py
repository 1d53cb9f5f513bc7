# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from degreedays.services.errors import FetchError

HEADER = "Lämmitystarveluvut (17°Cvrk),I,II,III,IV,V,VI,VII,VIII,IX,X,XI,XII"

SAMPLE_CSV = "\n".join([
    HEADER,
    "Vantaa,120,100,90,80,60,30,15,20,45,70,95,10",
    '"Helsinki, Kaisaniemi",115,98,88,75,55,25,10,15,40,66,90,105',
    "",
    "Jyväskylä,160,140,125,95,70,35,20,30,65,100,130,150",
    "Vantaa,1,2,3,4,5,6,7,8,9,10,11,12",
    "Oulu,,170,150,110,80,40,25,35,75,115,150,",
    "",
]) + "\n"


class FakeFetcher:
    """Stand-in for CsvFetcher: returns canned text per year, records calls."""

    def __init__(self, texts: dict[int, str] | None = None, default: str | None = None,
                 error: FetchError | None = None) -> None:
        self.texts = texts or {}
        self.default = default
        self.error = error
        self.calls: list[int] = []

    def fetch(self, year: int) -> str:
        self.calls.append(year)
        if self.error is not None:
            raise self.error
        if year in self.texts:
            return self.texts[year]
        if self.default is not None:
            return self.default
        raise FetchError("404 Client Error: Not Found", status_code=404)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def fake_fetcher(sample_csv: str) -> FakeFetcher:
    return FakeFetcher(default=sample_csv)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_url: "https://example.invalid/hdd-{year}.csv"
timeout_seconds: 12.5
delimiter: ","
encoding: utf-8
default_location: Helsinki
year_span: 5
error_log: true
logs_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "degreedays.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_fetcher():
    """Factory for FakeFetcher instances with custom texts or errors."""
    return FakeFetcher
