"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Manila"
WEEKS_PER_MONTH = 5

ORGANIZATION_NAME = "ANG MANANAMPALATAYANG GUMAWA"
REPORT_TITLE = "NATIONAL WORKERS' MONTHLY REPORT"

EXPORT_SHEET_NAME = "Report"
EXPORT_FILENAME = "report.xlsx"
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
