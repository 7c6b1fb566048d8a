from __future__ import annotations

from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings

BASE_DIR = Path(r"C:\AdminScripts")


class Settings(BaseSettings):
    # --- paths ---
    base_dir: Path = BASE_DIR
    users_csv: Path = BASE_DIR / "users.csv"
    cleanup_csv: Path = BASE_DIR / "cleanup.csv"
    provision_log: Path = BASE_DIR / "provision.log"
    report_dir: Path = BASE_DIR / "reports"

    # --- provisioning ---
    # Unset means a random password is generated per account.
    default_password: SecretStr | None = None
    log_passwords: bool = False
    password_length: int = 16

    # --- deprovisioning ---
    block_on_loaded_profile: bool = False

    # --- health report ---
    cpu_sample_seconds: float = 1.0
    failed_logon_window_hours: int = 24
    probe_target: str = "8.8.8.8"
    latency_probes: int = 4
    public_ip_url: str = "https://api.ipify.org"
    public_ip_timeout: float = 2.0

    # --- logging ---
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "WINADMIN_"}


settings = Settings()
