from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ColumnConfig:
    """
    Explicit order column names. Unset fields are resolved from aliases
    at ingestion time.
    """
    date: Optional[str] = None
    revenue: Optional[str] = None
    units: Optional[str] = None
    customer: Optional[str] = None
    order_id: Optional[str] = None
    shipping_days: Optional[str] = None

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ColumnConfig":
        section = config.get("columns") or {}
        known = {k: v for k, v in section.items() if k in cls.__dataclass_fields__}
        return cls(**known)
