# Data export module

from .exporter import (
    ExportError,
    CurveData,
    CSV_COLUMNS,
    build_curve_data,
    curves_to_dataframe,
    generate_csv_filename,
    generate_json_filename,
    write_curves_to_csv,
    build_output_json,
    write_curves_to_json,
)

__all__ = [
    "ExportError",
    "CurveData",
    "CSV_COLUMNS",
    "build_curve_data",
    "curves_to_dataframe",
    "generate_csv_filename",
    "generate_json_filename",
    "write_curves_to_csv",
    "build_output_json",
    "write_curves_to_json",
]
