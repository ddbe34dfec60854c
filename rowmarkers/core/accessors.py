"""Field value accessors backed by pandas DataFrames."""
from typing import Any, Optional
import pandas as pd
from rowmarkers.core.interfaces import FieldValueAccessor


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class DataFrameFieldAccessor(FieldValueAccessor):
    """Serve listing field values from DataFrames, one column per field."""
    
    def __init__(self, values: pd.DataFrame, rendered: Optional[pd.DataFrame] = None):
        """
        Initialize accessor.
        
        Args:
            values: Formatted field values, rows in listing order
            rendered: Rendered field output; falls back to ``values``
        """
        self.values = values.reset_index(drop=True)
        self.rendered = rendered.reset_index(drop=True) if rendered is not None else self.values
    
    @staticmethod
    def _lookup(frame: pd.DataFrame, row_index: int, field_id: str) -> Any:
        if field_id not in frame.columns or not 0 <= row_index < len(frame):
            return None
        value = frame.at[row_index, field_id]
        return None if _is_missing(value) else value
    
    def get_field(self, row_index: int, field_id: str) -> Optional[str]:
        value = self._lookup(self.rendered, row_index, field_id)
        return None if value is None else str(value)
    
    def get_field_value(self, row_index: int, field_id: str) -> Any:
        return self._lookup(self.values, row_index, field_id)
