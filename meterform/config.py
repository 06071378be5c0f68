"""TOML configuration loader for meterform."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

from .const import DEFAULT_API_URL, DEFAULT_MODEL, DEFAULT_SYSTEM_PROMPT


@dataclass
class StorageConfig:
    db_path: str = "~/.config/meterform/meterform.db"


@dataclass
class FormatterConfig:
    backend: str = "chat"
    url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    api_key: str = ""


@dataclass
class CameraConfig:
    enabled: bool = True
    index: int = 0
    save_dir: str = "/tmp/meterform"


@dataclass
class LocationConfig:
    enabled: bool = True
    provider: str = "manual"
    latitude: float = 0.0
    longitude: float = 0.0


@dataclass
class ScannerConfig:
    backend: str = "manual"


@dataclass
class SignatureConfig:
    path: str = ""


@dataclass
class ExportConfig:
    backend: str = "log"
    out_dir: str = "~/.config/meterform/exports"


@dataclass
class MeterFormConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    location: LocationConfig = field(default_factory=LocationConfig)
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    signature: SignatureConfig = field(default_factory=SignatureConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(path: str | Path | None = None) -> MeterFormConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The formatter API key can be overridden via the environment.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    sto = raw.get("storage", {})
    fmt = raw.get("formatter", {})
    cam = raw.get("camera", {})
    loc = raw.get("location", {})
    scn = raw.get("scanner", {})
    sig = raw.get("signature", {})
    exp = raw.get("export", {})

    # Resolve API key: config file → environment variable
    api_key = fmt.get("api_key", "") or os.environ.get("METERFORM_API_KEY", "")

    return MeterFormConfig(
        storage=StorageConfig(
            db_path=sto.get("db_path", "~/.config/meterform/meterform.db"),
        ),
        formatter=FormatterConfig(
            backend=fmt.get("backend", "chat"),
            url=fmt.get("url", DEFAULT_API_URL),
            model=fmt.get("model", DEFAULT_MODEL),
            system_prompt=fmt.get("system_prompt", DEFAULT_SYSTEM_PROMPT),
            api_key=api_key,
        ),
        camera=CameraConfig(
            enabled=cam.get("enabled", True),
            index=cam.get("index", 0),
            save_dir=cam.get("save_dir", "/tmp/meterform"),
        ),
        location=LocationConfig(
            enabled=loc.get("enabled", True),
            provider=loc.get("provider", "manual"),
            latitude=float(loc.get("latitude", 0.0)),
            longitude=float(loc.get("longitude", 0.0)),
        ),
        scanner=ScannerConfig(
            backend=scn.get("backend", "manual"),
        ),
        signature=SignatureConfig(
            path=sig.get("path", ""),
        ),
        export=ExportConfig(
            backend=exp.get("backend", "log"),
            out_dir=exp.get("out_dir", "~/.config/meterform/exports"),
        ),
    )
