"""JSON and CSV export of result batches."""

import csv
import io
import json

from dnsprop.models.dns_result import ResultBatch, ServerResult


CSV_HEADER = ["Server", "Region", "Status", "RTT (ms)", "Answers", "TTLs"]

MULTI_VALUE_SEPARATOR = ";"


class BatchExporter:
    """Formats a ResultBatch for download.

    Provides static methods for the JSON and CSV export formats.
    """

    @staticmethod
    def to_json(batch: ResultBatch) -> str:
        """Generate pretty-printed JSON of the batch.

        Args:
            batch: Batch to export.

        Returns:
            str: JSON string in the resolver response shape.
        """
        return json.dumps(batch.to_json(), indent=2)

    @staticmethod
    def csv_row(result: ServerResult) -> list[str]:
        """Build one CSV row; missing values become empty strings."""
        return [
            result.server_id,
            result.region or "",
            result.raw_status,
            f"{result.rtt_ms:.1f}" if result.rtt_ms is not None else "",
            MULTI_VALUE_SEPARATOR.join(a.value for a in result.answers),
            MULTI_VALUE_SEPARATOR.join(
                str(a.ttl) if a.ttl is not None else "" for a in result.answers
            ),
        ]

    @staticmethod
    def to_csv(batch: ResultBatch) -> str:
        """Generate CSV with every field double-quoted.

        Args:
            batch: Batch to export.

        Returns:
            str: Header plus one row per result, in batch order.

        Example:
            >>> print(BatchExporter.to_csv(batch))
            "Server","Region","Status","RTT (ms)","Answers","TTLs"
            "1.1.1.1","San Francisco, CA, Cloudflare","ok","12.3","93.184.216.34","300"
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for result in batch.results:
            writer.writerow(BatchExporter.csv_row(result))
        return buffer.getvalue()
