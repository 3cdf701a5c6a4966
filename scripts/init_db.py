# scripts/init_db.py
"""
Create the customers / invoices / telephone_numbers tables.

Usage:
    python -m scripts.init_db          # create missing tables
    python -m scripts.init_db --reset  # drop and recreate everything
"""

import argparse
import logging

from customer_api.config import get_settings
from customer_api.db.engine import get_engine
from customer_api.db.schema import metadata
from customer_api.log_config import configure_logging

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    args = parser.parse_args()

    configure_logging(get_settings().log_level)
    engine = get_engine()
    if args.reset:
        metadata.drop_all(engine)
        logger.info("Dropped existing tables.")
    metadata.create_all(engine)
    logger.info("DB schema created at %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    main()
