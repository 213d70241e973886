"""CLI adapter to create the dashboard tables."""

from src.infrastructure.container import build_database_adapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.schema import prepare_schema


def main() -> None:
    """Create any missing tables in the configured database."""
    logger = get_app_logger()
    db_adapter = build_database_adapter()
    prepare_schema(db_adapter)
    logger.info(f"Schema ready at {db_adapter.get_engine().url}")


if __name__ == "__main__":  # pragma: no cover
    main()
