"""csvview Core -- Quick demo.

Run: python examples/demo.py
"""

from datetime import date
from pathlib import Path

# Resolve example file path
examples_dir = Path(__file__).parent
documents = str(examples_dir / "documents.csv")


def main():
    from csvview_core import UploadSession

    session = UploadSession()

    # 1. Upload and parse
    print("=" * 60)
    print("1. UPLOAD")
    print("=" * 60)
    outcome = session.upload_path(documents)
    if not outcome.ok:
        print(f"  Error: {outcome.message}")
        return
    print(f"  File: {outcome.filename}")
    print(f"  Rows: {outcome.rows}, Columns: {outcome.columns}")
    print()

    engine = outcome.engine

    # 2. Filter by text and date
    print("=" * 60)
    print("2. FILTER")
    print("=" * 60)
    engine.set_filter_text("Dokument: Typ", "rechnung")
    view = engine.get_visible_rows()
    print(f"  Typ contains 'rechnung': {[r['Dokument: ID'] for r in view.rows]}")
    engine.set_date_filter(date(2024, 2, 3))
    view = engine.get_visible_rows()
    print(f"  ... and dated 03.02.2024: {[r['Dokument: ID'] for r in view.rows]}")
    print(f"  {view.summary()}")
    engine.clear_filters()
    print()

    # 3. Sort and paginate
    print("=" * 60)
    print("3. SORT & PAGINATE")
    print("=" * 60)
    engine.set_sort("Dokument: Typ")
    engine.set_page_size(10)
    view = engine.get_visible_rows()
    for row in view.rows:
        print(f"    {row['Dokument: ID']}  {row['Dokument: Typ']!r}")
    print(f"  Page {view.page} of {view.total_pages}")
    print()

    print("Done! Try the CLI: csvview view examples/documents.csv --sort 'Dokument: ID' --desc")


if __name__ == "__main__":
    main()
