#!/usr/bin/env python3
"""
generate_synthetic_logs.py - Write a sample time log and import statistics log.

The import volume drives both process durations, with a weekend dip and
some noise. A few nights are missing from the time log, a few durations are
left blank, and some nights are logged twice in the import log (a rerun with
a lower total), so every cleaning rule of the pipeline gets exercised.

Usage:
    python scripts/generate_synthetic_logs.py --days 365 --out-dir raw_logs
"""

import argparse
import random
from datetime import date, timedelta
from pathlib import Path

SOURCE_SHARES = {"SWB": 0.55, "ZDB": 0.15, "EZB": 0.2, "Online": 0.1}


def hhmm(minutes: int) -> str:
    minutes = max(0, min(minutes, 23 * 60 + 59))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def import_row(day: date, total: int) -> str:
    counts = [int(total * share * random.uniform(0.8, 1.2)) for share in SOURCE_SHARES.values()]
    subfields = int(total * random.uniform(0.0, 0.01))
    large = int(total * random.uniform(0.0, 0.02))
    return " ".join(str(v) for v in [day.isoformat(), total, *counts, subfields, large])


def main():
    ap = argparse.ArgumentParser(description="Generate synthetic catalog import logs")
    ap.add_argument("--days", type=int, default=365)
    ap.add_argument("--start", default="2021-01-01", help="First night (YYYY-mm-dd)")
    ap.add_argument("--out-dir", default="raw_logs")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--missing-frac", type=float, default=0.05,
                    help="Approx fraction of nights missing from the time log")
    ap.add_argument("--dup-frac", type=float, default=0.03,
                    help="Approx fraction of nights logged twice in the import log")
    args = ap.parse_args()

    random.seed(args.seed)
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    start = date.fromisoformat(args.start)
    time_lines = ["Datum KUPICA AKKUAK"]
    import_lines = [
        f"# nightly import statistics generated {date.today().isoformat()}",
        "Datum Gesamt SWB ZDB EZB Online >4000 Subfields >40kB",
    ]

    for i in range(args.days):
        day = start + timedelta(days=i)
        weekend = day.weekday() >= 5
        total = int(random.gauss(3000 if weekend else 9000, 1500))
        total = max(total, 50)

        import_lines.append(import_row(day, total))
        if random.random() < args.dup_frac:
            import_lines.append(import_row(day, int(total * random.uniform(0.5, 0.99))))

        if random.random() < args.missing_frac:
            continue
        kupica = hhmm(int(20 + total / 150 + random.gauss(0, 10)))
        akkuak = hhmm(int(35 + total / 100 + random.gauss(0, 15)))
        if random.random() < 0.02:
            akkuak = "NA"
        time_lines.append(f"{day.isoformat()} {kupica} {akkuak}")

    time_path = out_dir / "time.log"
    import_path = out_dir / "import_stats.log"
    time_path.write_text("\n".join(time_lines) + "\n", encoding="utf-8")
    import_path.write_text("\n".join(import_lines) + "\n", encoding="utf-8")

    print(f"✅ Wrote {time_path} ({len(time_lines) - 1} nights)")
    print(f"✅ Wrote {import_path} ({len(import_lines) - 2} rows)")


if __name__ == "__main__":
    main()
