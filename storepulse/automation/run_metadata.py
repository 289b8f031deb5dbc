import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional


def create_run_metadata(
    input_files: List[str],
    config: Dict,
    output_dir: Path,
    status: str = "completed",
    errors: Optional[List[str]] = None,
    reports: int = 0,
) -> Path:
    """
    Write a run.json file describing a single report run.
    """

    metadata = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status,
        "input_files": input_files,
        "reports": reports,
        "errors": errors or [],
        "config_summary": list(config.keys()),
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    metadata_path = output_dir / "run.json"

    with open(metadata_path, "w", encoding="utf-8") as f:
        json.dump(metadata, f, indent=2)

    return metadata_path
