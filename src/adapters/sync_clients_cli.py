"""CLI adapter to deactivate clients missing from the spreadsheet.

Reads the active external ids (one per line) from the file named in the
first argument, or from stdin, and runs the cleanup step of the sync.
"""

from pathlib import Path
import sys
from typing import TextIO

from src.infrastructure.container import (
    build_database_adapter,
    build_sync_use_case,
)
from src.infrastructure.logging.logger import get_app_logger


def _read_external_ids(stream: TextIO) -> list[str]:
    """Return the non-blank lines of ``stream``."""
    return [line.strip() for line in stream if line.strip()]


def main(argv: list[str] | None = None) -> None:
    """Run the client cleanup use case."""
    args = sys.argv[1:] if argv is None else argv
    logger = get_app_logger()

    if args:
        path = Path(args[0])
        if not path.is_file():
            logger.error(f"Active ids file not found: {path}")
            return
        with path.open(encoding="utf-8") as handle:
            external_ids = _read_external_ids(handle)
    else:
        external_ids = _read_external_ids(sys.stdin)

    use_case = build_sync_use_case(build_database_adapter())
    result = use_case.cleanup(external_ids)

    print(
        f"Deactivated {result.deactivated_count} clients "
        f"({result.active_count} active external ids)."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
