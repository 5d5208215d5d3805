# src/batch/quote_batch.py
"""
Quote a file of requests in one go.

Input: CSV or parquet, one request per row, columns as in
src.features.runtime.FLAT_COLUMNS (missing columns are treated as empty).
Every cell is read as text, exactly as the wizard would have sent it.

Outputs:
1) The input rows plus quote columns: amount, annual_equivalent, admin_fee,
   period_multiplier, no_claim_discount, warnings
2) Run report: reports/quote_batch_report.json

Usage:
  python -m src.batch.quote_batch --in_path data/raw/requests.csv
  python -m src.batch.quote_batch --in_path data/raw/requests.csv --out_path data/processed/quotes.csv --upload_s3
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from src.features.runtime import FLAT_COLUMNS, build_request_from_flat
from src.pricing.config import PricingConfig
from src.pricing.quote import calculate_premium
from src.utils.config import get_aws_config, get_paths
from src.utils.io import read_df, s3_upload_file, write_df, write_json

QUOTE_COLUMNS = [
    "amount",
    "annual_equivalent",
    "admin_fee",
    "period_multiplier",
    "no_claim_discount",
    "warnings",
]


@dataclass
class BatchReport:
    source: str
    rows: int
    quoted_rows: int
    zero_quote_rows: int
    rows_with_warnings: int
    floored_rows: int
    total_amount: float
    mean_amount: float
    notes: List[str] = field(default_factory=list)


def quote_frame(df: pd.DataFrame, cfg: Optional[PricingConfig] = None) -> pd.DataFrame:
    """
    Price every row of a flat request frame.

    Returns a copy of df with the QUOTE_COLUMNS appended.
    """
    cfg = cfg or PricingConfig()
    out = df.copy()
    for col in FLAT_COLUMNS:
        if col not in out.columns:
            out[col] = ""

    records = []
    for row in out[FLAT_COLUMNS].to_dict(orient="records"):
        built = build_request_from_flat(row)
        q = calculate_premium(built.request, cfg=cfg)
        records.append(
            {
                "amount": q.amount,
                "annual_equivalent": np.nan if q.annual_equivalent is None else q.annual_equivalent,
                "admin_fee": q.admin_fee,
                "period_multiplier": q.period_multiplier,
                "no_claim_discount": q.no_claim_discount,
                "warnings": "; ".join(built.warnings),
                "_floored": q.annual_equivalent is not None and q.amount == q.minimum_premium,
            }
        )

    quotes = pd.DataFrame.from_records(records, index=out.index, columns=QUOTE_COLUMNS + ["_floored"])
    return pd.concat([out, quotes], axis=1)


def build_report(quoted: pd.DataFrame, source: Path) -> BatchReport:
    notes: List[str] = []
    rows = int(len(quoted))
    if rows == 0:
        notes.append("WARNING: Input dataframe is empty.")

    zero = int((quoted["amount"] == 0).sum()) if rows else 0
    total = float(quoted["amount"].sum()) if rows else 0.0
    quoted_rows = rows - zero

    if zero:
        notes.append(f"{zero} row(s) had no usable sum insured and were quoted at 0.")

    return BatchReport(
        source=str(source),
        rows=rows,
        quoted_rows=quoted_rows,
        zero_quote_rows=zero,
        rows_with_warnings=int((quoted["warnings"] != "").sum()) if rows else 0,
        floored_rows=int(quoted["_floored"].sum()) if rows else 0,
        total_amount=total,
        mean_amount=float(total / quoted_rows) if quoted_rows else 0.0,
        notes=notes,
    )


def run(in_path: Path, out_path: Path, cfg: Optional[PricingConfig] = None) -> Tuple[pd.DataFrame, BatchReport]:
    df = read_df(in_path, as_text=True)
    quoted = quote_frame(df, cfg=cfg)
    report = build_report(quoted, in_path)
    write_df(quoted.drop(columns=["_floored"]), out_path)
    return quoted, report


def _default_out_path(in_path: Path) -> Path:
    return get_paths().processed_dir / f"{in_path.stem}_quotes.parquet"


def _default_report_path() -> Path:
    return get_paths().reports_dir / "quote_batch_report.json"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Quote a CSV/Parquet file of motor quote requests.")
    p.add_argument("--in_path", type=str, required=True, help="Input CSV/Parquet of flat quote requests")
    p.add_argument("--out_path", type=str, default=None, help="Output CSV/Parquet. Default: data/processed/<stem>_quotes.parquet")
    p.add_argument("--report_path", type=str, default=None, help="Report JSON path. Default: reports/quote_batch_report.json")
    p.add_argument("--upload_s3", action="store_true", help="Upload quotes + report to S3 (requires env S3_BUCKET)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    aws = get_aws_config()

    in_path = Path(args.in_path)
    out_path = Path(args.out_path) if args.out_path else _default_out_path(in_path)
    report_path = Path(args.report_path) if args.report_path else _default_report_path()

    if args.upload_s3 and not aws.enabled:
        raise RuntimeError("S3 upload requested but S3_BUCKET is not set in environment.")

    _, report = run(in_path, out_path)
    write_json(report, report_path)

    print(f"[OK] Quotes saved : {out_path}")
    print(f"[OK] Report saved : {report_path}")
    print(
        f"Rows: {report.rows} | Quoted: {report.quoted_rows} | Zero: {report.zero_quote_rows} "
        f"| Total: {report.total_amount:,.2f}"
    )

    if args.upload_s3:
        bucket = aws.s3_bucket  # type: ignore[assignment]
        prefix = aws.s3_prefix.rstrip("/")

        # s3://<bucket>/<prefix>/quotes/<filename>
        # s3://<bucket>/<prefix>/reports/<filename>
        quotes_key = f"{prefix}/quotes/{out_path.name}"
        report_key = f"{prefix}/reports/{report_path.name}"

        s3_upload_file(out_path, bucket=bucket, key=quotes_key, region=aws.region)
        s3_upload_file(report_path, bucket=bucket, key=report_key, region=aws.region)

        print(f"[OK] Uploaded quotes : s3://{bucket}/{quotes_key}")
        print(f"[OK] Uploaded report : s3://{bucket}/{report_key}")


if __name__ == "__main__":
    main()
