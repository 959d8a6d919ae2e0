from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent
PROJECT_DIR = BASE_DIR.parent
OPENCLAW_HOME = Path.home() / ".openclaw"


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "System Monitor"
    debug: bool = False
    log_level: str = "INFO"

    # --- refresh intervals ---
    system_interval: float = 10.0  # seconds between system samples
    health_interval: float = 30.0  # seconds between gateway probes
    probe_timeout: float = 5.0
    cpu_sample_window: float = 0.2  # seconds CPU load is measured over

    # --- openclaw gateway ---
    openclaw_config_path: str = str(OPENCLAW_HOME / "openclaw.json")
    openclaw_url: str = ""  # overrides the URL derived from the config file
    openclaw_host: str = "localhost"
    openclaw_status_path: str = "/api/status"

    # --- static front end / snapshot generator ---
    public_dir: str = str(PROJECT_DIR / "public")
    cron_snapshot_path: str = str(PROJECT_DIR / "cron-snapshot.json")
    gemini_usage_path: str = str(
        OPENCLAW_HOME / "workspace" / "seo-blog-next" / "scripts" / "gemini-usage.json"
    )
    snapshot_timezone: str = "Asia/Taipei"

    # --- server ---
    host: str = "0.0.0.0"
    port: int = 3002
    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_prefix": "SYSMON_"}


settings = Settings()
