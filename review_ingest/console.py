"""Human-readable console output for ingestion runs."""

from collections.abc import Sequence

from review_ingest.ingestion.models import IngestionReport, ItemResult

BOX_WIDTH = 60


def boxed(message: str, title: str = "Review Ingest") -> str:
    """Render ``message`` inside a titled box."""
    inner = max(BOX_WIDTH, len(message) + 4, len(title) + 6)
    top = f"┌─ {title} " + "─" * (inner - len(title) - 3) + "┐"
    blank = "│" + " " * inner + "│"
    body = "│  " + message.ljust(inner - 2) + "│"
    bottom = "└" + "─" * inner + "┘"
    return "\n".join([top, blank, body, blank, bottom])


def announce(message: str, title: str = "Review Ingest") -> None:
    """Print ``message`` in a box, set off by blank lines."""
    print(f"\n{boxed(message, title)}\n")


def print_welcome(urls: Sequence[str], collection: str) -> None:
    """Print the banner shown before a run."""
    print(
        "\n".join(
            [
                "Review Ingest",
                "",
                f"Step 1: Process {len(urls)} album reviews",
                f"Step 2: Extract review content and store it in '{collection}'",
            ]
        )
    )


def print_item_result(result: ItemResult) -> None:
    """Print the outcome of one item as soon as it is known."""
    if result.succeeded:
        announce(
            f"Added review: {result.title} by {result.artist} (Score: {result.score})",
            title="Review Added",
        )
    else:
        print(f"Failed to process review at {result.url}: [{result.error_code}] {result.error}")


def print_summary(report: IngestionReport) -> None:
    """Print the closing summary of a run."""
    print("\n" + "=" * BOX_WIDTH)
    print("INGESTION SUMMARY")
    print("=" * BOX_WIDTH)
    print(f"Collection: {report.collection}")
    print(f"Attempted:  {report.attempted}")
    print(f"Succeeded:  {report.succeeded}")
    print(f"Failed:     {report.failed}")
    if report.failures:
        print("\nFailed URLs:")
        for failure in report.failures:
            print(f"  {failure.url} ({failure.error_code})")
    print("=" * BOX_WIDTH)
