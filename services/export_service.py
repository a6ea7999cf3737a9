import csv
from datetime import date
from typing import Any, Dict, List, Optional

import pandas as pd


def records_to_csv(records: List[Dict[str, Any]]) -> str:
    """
    Header row from the first record's keys, one line per record.
    Text is quoted, numbers are not. No records -> empty string.
    """
    if not records:
        return ""
    headers = list(records[0].keys())
    df = pd.DataFrame(records, columns=headers)
    return df.to_csv(index=False, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")


def dated_filename(prefix: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{prefix}-{today.isoformat()}.csv"
