from logging import getLogger

logger = getLogger("imdbwatch.scraping")


__all__ = ["logger"]
