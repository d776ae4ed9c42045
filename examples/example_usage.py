"""Example: use the service layer directly (no Flask).

Exports one stored report to an .xlsx file next to the current directory.
Usage: python -m examples.example_usage <report_id> [output.xlsx]
"""

import importlib
import sys
from pathlib import Path

from config import get_settings_module

from src.field_reports.field_reports.container import build_container


def main():
    report_id = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    out_path = Path(sys.argv[2]) if len(sys.argv) > 2 else Path("report.xlsx")

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    view = container.report_service.find_by_id(report_id)
    out_path.write_bytes(container.report_exporter.render(view))
    print(f"Wrote report {report_id} ({view['workerName']}, {view['monthOf']}) -> {out_path}")


if __name__ == "__main__":
    main()
