"""Sensor configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Sensor settings loaded from environment variables."""

    # Monitored device
    device_node: str = "/dev/kvm"
    udev_subsystem: str = "misc"  # udev subsystem the kvm node is announced on

    # Instance identity on the QEMU command line
    uuid_flag: str = "-uuid"
    instance_id_max_length: int = 36  # UUID text form, no terminator
    proc_root: str = "/proc"

    # Polling cadence (seconds)
    poll_interval: float = 0.25

    # Trace sink: "log" or "http"
    trace_sink: str = "log"
    enabled_events: list[str] = ["kvm_created", "kvm_destroyed"]

    # HTTP collector (trace_sink = "http")
    collector_url: str = ""
    collector_timeout: float = 2.0

    # Logging configuration
    log_format: str = "json"  # "json" or "text"
    log_level: str = "INFO"

    class Config:
        env_prefix = "KVM_UDEV_"


settings = Settings()
