import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    db_path: Path
    log_level: str = "INFO"


def get_settings() -> Settings:
    data_dir = Path(
        os.environ.get("FINANCE_TRACKER_DATA_DIR") or Path.cwd() / ".data"
    )
    db_name = os.environ.get("FINANCE_TRACKER_DB_NAME") or "finance.sqlite"
    log_level = os.environ.get("FINANCE_TRACKER_LOG_LEVEL") or "INFO"
    return Settings(
        data_dir=data_dir,
        db_path=data_dir / db_name,
        log_level=log_level.upper(),
    )
