"""DataFrame-based insert generation."""

import pandas as pd
from typing import List
from . import statements

_cmds = {'insert': statements.insert, 'insert_ignore': statements.insert_ignore, 'replace': statements.replace}


def _py(v):
    if v is None or (pd.api.types.is_scalar(v) and pd.isna(v)):
        return None
    return v.item() if hasattr(v, 'item') else v


def df_sql(df: pd.DataFrame, table: str, cmd: str = 'insert') -> List[str]:
    """Generate one insert statement per DataFrame row; NaN becomes null."""
    if not isinstance(df, pd.DataFrame):
        raise TypeError('Input must be a pandas DataFrame')
    if cmd not in _cmds:
        raise ValueError(f'Unknown insert command: {cmd}')
    out = []
    for row in df.to_dict('records'):
        out.append(_cmds[cmd](table, {str(k): _py(v) for k, v in row.items()}))
    return out
