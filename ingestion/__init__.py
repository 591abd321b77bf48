from ingestion.csv_file import (
    CSV_COLUMNS,
    ParseResult,
    export_filename,
    generate_csv,
    parse_full_date,
    parse_csv,
    parse_csv_detailed,
)

__all__ = [
    "CSV_COLUMNS",
    "ParseResult",
    "export_filename",
    "generate_csv",
    "parse_full_date",
    "parse_csv",
    "parse_csv_detailed",
]
