from typing import List, Dict

import pandas as pd

from shared.core.schemas import ExportResponse


def export_rows(
    data: List[Dict],
    filename: str = "export.csv",
    column_map: Dict[str, str] | None = None,
) -> ExportResponse:
    """
    Shape a list of dictionaries into export rows with friendly headers and safe handling of missing keys.

    Args:
        data: List of dictionaries (each dict = row)
        filename: Suggested download name
        column_map: Mapping of data keys -> friendly column names (also fixes column order)
    """
    if not data:
        return ExportResponse(filename=filename, data=[])

    df = pd.DataFrame(data)

    if column_map:
        # Fill missing keys to avoid KeyError
        for key in column_map.keys():
            if key not in df.columns:
                df[key] = None
        df = df[list(column_map.keys())].rename(columns=column_map)

    # NaN is not JSON serializable
    df = df.astype(object).where(pd.notna(df), None)
    return ExportResponse(filename=filename, data=df.to_dict(orient="records"))


def to_csv(export: ExportResponse) -> str:
    return pd.DataFrame(export.data).to_csv(index=False)
