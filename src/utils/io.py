from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_json(obj: Any, path: Path) -> None:
    ensure_dir(path.parent)

    if is_dataclass(obj):
        payload = asdict(obj)
    else:
        payload = obj

    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def read_df(path: Union[str, Path], as_text: bool = False) -> pd.DataFrame:
    """
    Read a CSV or parquet file.

    as_text keeps every cell as the literal string from the file (empty
    cells become ""), which is how quote requests carry their numbers.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suf = path.suffix.lower()
    if suf == ".csv":
        if as_text:
            return pd.read_csv(path, dtype=str, keep_default_na=False)
        return pd.read_csv(path)
    if suf == ".parquet":
        df = pd.read_parquet(path)
        if as_text:
            df = df.astype("string").fillna("").astype(object)
        return df
    raise ValueError(f"Unsupported dataframe format: {suf}")


def write_df(df: pd.DataFrame, path: Union[str, Path]) -> None:
    path = Path(path)
    ensure_dir(path.parent)

    suf = path.suffix.lower()
    if suf == ".csv":
        df.to_csv(path, index=False)
        return
    if suf == ".parquet":
        df.to_parquet(path, index=False)
        return
    raise ValueError(f"Unsupported dataframe format: {suf}")


# ---------------------------
# Optional S3 support
# ---------------------------
def _boto3_client(service: str, region: Optional[str] = None):
    try:
        import boto3  # type: ignore
    except ImportError as e:
        raise ImportError(
            "boto3 is required for S3 operations. Install with: pip install boto3"
        ) from e
    return boto3.client(service, region_name=region)


def s3_upload_file(
    local_path: Path, bucket: str, key: str, region: Optional[str] = None
) -> None:
    local_path = Path(local_path)
    if not local_path.exists():
        raise FileNotFoundError(f"Local file not found: {local_path}")
    s3 = _boto3_client("s3", region=region)
    s3.upload_file(str(local_path), bucket, key)
