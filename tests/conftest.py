"""Shared test fixtures for csvview-core."""

import pytest

from csvview_core import Dataset, Settings


DOCUMENTS_CSV = (
    "Dokument: Datum;Dokument: ID;Dokument: Typ;Dokument: Bestellnummer;Dokument: Externe ID\n"
    "03.02.2024;1001;Rechnung;B-1;EXT-1\n"
    "04.02.2024;1002;Gutschrift;B-2;EXT-2\n"
    '03.02.2024;1003;"Rechnung; korrigiert";B-3;"Zeile 1\n'
    'Zeile 2"\n'
    "\n"
    "05.02.2024;1004;Angebot;;\n"
    ";;;;\n"
)


@pytest.fixture
def documents_text():
    """Semicolon export with a quoted multi-line field and blank rows."""
    return DOCUMENTS_CSV


@pytest.fixture
def documents_csv(tmp_path):
    """Write the document export to a .csv file."""
    path = tmp_path / "documents.csv"
    path.write_text(DOCUMENTS_CSV, encoding="utf-8")
    return str(path)


@pytest.fixture
def names_dataset():
    """Three rows with mixed-case names."""
    return Dataset(
        headers=["Name", "City"],
        rows=[
            {"Name": "Alice", "City": "Berlin"},
            {"Name": "bob", "City": "Hamburg"},
            {"Name": "ALICEX", "City": "berlin"},
        ],
    )


@pytest.fixture
def numbered_dataset():
    """45 rows with an ``N`` column of zero-padded numbers."""
    return Dataset(
        headers=["N", "Label"],
        rows=[{"N": f"{i:02d}", "Label": f"row {i}"} for i in range(1, 46)],
    )


@pytest.fixture
def settings():
    return Settings()
