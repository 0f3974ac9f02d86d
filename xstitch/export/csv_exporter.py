import csv
import io

from .context import build_export_context


def export_csv(pattern, **context_kwargs) -> str:
    """Materials list: one row per thread, most used first."""
    context = build_export_context(pattern, **context_kwargs)
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(["symbol", "brand", "code", "name", "hex", "stitches", "skeins"])
    for row in context["legend"]:
        writer.writerow([
            row.get("symbol") or "",
            context["brand"],
            row["code"],
            row.get("name") or "",
            row["hex"],
            row["stitch_count"],
            row["skein_estimate"],
        ])
    return buf.getvalue()
