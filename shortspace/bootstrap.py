"""Wire the service from configuration."""

import logging
from typing import Optional

from .allocator import IdentifierAllocator
from .database.partitions import PartitionManager
from .database.sqlite import URLShortenerSQLite
from .scraper import MetadataScraper
from .service import ShortURLService
from .shortcode import ShortCodeGenerator


def build_service(config, logger: Optional[logging.Logger] = None) -> ShortURLService:
    """Build a ready-to-use service from a Config instance."""
    logger = logger or logging.getLogger("shortspace")

    partitions = PartitionManager(
        data_dir=config.data_dir,
        operation_timeout_seconds=config.db_timeout_seconds,
        logger=logger,
    )
    db = URLShortenerSQLite(partitions, logger=logger)

    allocator = IdentifierAllocator(
        store=db,
        generator=ShortCodeGenerator(default_length=config.short_id_length),
        max_attempts=config.max_id_attempts,
        logger=logger,
    )

    scraper = None
    if config.scrape_metadata:
        scraper = MetadataScraper(
            timeout_seconds=config.scrape_timeout_seconds,
            logger=logger,
        )

    return ShortURLService(
        db=db,
        allocator=allocator,
        scraper=scraper,
        logger=logger,
        scrape_metadata=config.scrape_metadata,
        epoch_year=config.label_epoch_year,
    )
