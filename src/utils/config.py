from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key)
    return v if v is not None and v != "" else default


def _env_int(key: str, default: int) -> int:
    v = _env(key)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got {v!r}") from e


@dataclass(frozen=True)
class ProjectPaths:
    root: Path
    data_dir: Path
    raw_dir: Path
    processed_dir: Path
    reports_dir: Path


def get_project_root() -> Path:
    """
    Resolve repo root robustly.
    Assumes this file lives at: <root>/src/utils/config.py
    """
    return Path(__file__).resolve().parents[2]


def get_paths() -> ProjectPaths:
    root = get_project_root()
    data_dir = root / "data"
    return ProjectPaths(
        root=root,
        data_dir=data_dir,
        raw_dir=data_dir / "raw",
        processed_dir=data_dir / "processed",
        reports_dir=root / "reports",
    )


@dataclass(frozen=True)
class QuoteSettings:
    currency: str
    number_prefix: str
    validity_days: int


def get_quote_settings() -> QuoteSettings:
    """
    Presentation settings for issued quotations.

    Env:
      QUOTE_CURRENCY       (default: ZMW)
      QUOTE_NUMBER_PREFIX  (default: ZMI)
      QUOTE_VALIDITY_DAYS  (default: 30)
    """
    return QuoteSettings(
        currency=_env("QUOTE_CURRENCY", "ZMW") or "ZMW",
        number_prefix=_env("QUOTE_NUMBER_PREFIX", "ZMI") or "ZMI",
        validity_days=_env_int("QUOTE_VALIDITY_DAYS", 30),
    )


@dataclass(frozen=True)
class AwsConfig:
    region: str
    s3_bucket: Optional[str]
    s3_prefix: str

    @property
    def enabled(self) -> bool:
        return self.s3_bucket is not None


def get_aws_config() -> AwsConfig:
    """
    Configure S3 usage via environment variables.
    Keep it optional so local runs are frictionless.

    Env:
      AWS_REGION (default: eu-west-2)
      S3_BUCKET  (optional)
      S3_PREFIX  (default: motor-quote-engine)
    """
    return AwsConfig(
        region=_env("AWS_REGION", "eu-west-2") or "eu-west-2",
        s3_bucket=_env("S3_BUCKET", None),
        s3_prefix=_env("S3_PREFIX", "motor-quote-engine")
        or "motor-quote-engine",
    )
