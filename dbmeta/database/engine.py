"""Database connection and engine management."""

import logging
import re
from pathlib import Path

from firebird.driver import create_database, driver_config
from pydantic import BaseModel, Field
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import ArgumentError

logger = logging.getLogger(__name__)

DRIVER_NAME = "firebird+firebird"


class DatabaseSettings(BaseModel):
    """Settings used to create and connect to a new database file"""

    user: str = Field(default="SYSDBA", description="Database user")
    password: str = Field(default="masterkey", description="Database password")
    charset: str = Field(default="UTF8", description="Connection and default character set")
    page_size: int = Field(default=16384, description="Page size of newly created databases")
    host: str | None = Field(default=None, description="Server host (None for a local/embedded database)")
    overwrite: bool = Field(default=True, description="Replace an existing database file")
    file_name: str = Field(default="database.fdb", description="Database file name inside the database directory")


def sanitize_connection_string(connection_string: str) -> str:
    """Mask the password of a connection string so it can be logged.

    Args:
        connection_string: Database URL

    Returns:
        The URL with its password replaced by ***
    """
    try:
        return make_url(connection_string).render_as_string(hide_password=True)
    except ArgumentError:
        # Not a URL SQLAlchemy understands, mask anything between ":" and "@"
        return re.sub(r"(://[^:/@]+):[^@/]+@", r"\1:***@", connection_string)


def build_connection_url(database: Path, settings: DatabaseSettings) -> URL:
    """Build a SQLAlchemy URL for a Firebird database file.

    Args:
        database: Path of the database file
        settings: Credentials, host and character set

    Returns:
        SQLAlchemy URL instance
    """
    return URL.create(
        DRIVER_NAME,
        username=settings.user,
        password=settings.password,
        host=settings.host,
        database=str(database),
        query={"charset": settings.charset},
    )


def create_database_engine(connection_string: str | URL) -> Engine:
    """Create a SQLAlchemy engine for the specified database.

    Args:
        connection_string: The database connection string or URL

    Returns:
        SQLAlchemy Engine instance
    """
    engine = create_engine(connection_string, echo=False)
    return engine


def create_database_file(database: Path, settings: DatabaseSettings) -> None:
    """Create an empty database file.

    Args:
        database: Path of the database file to create
        settings: Credentials, page size, character set and overwrite flag

    Raises:
        FileExistsError: If the file exists and overwrite is disabled
    """
    if database.exists() and not settings.overwrite:
        raise FileExistsError(f"Database already exists: {database}")

    target = f"{settings.host}:{database}" if settings.host else str(database)

    # Page size is taken from the registered database configuration
    db_config = driver_config.get_database(target)
    if db_config is None:
        db_config = driver_config.register_database(target)
        db_config.database.value = target
    db_config.page_size.value = settings.page_size

    logger.info(f"Creating database {target} (page size {settings.page_size})")
    connection = create_database(
        target,
        user=settings.user,
        password=settings.password,
        charset=settings.charset,
        overwrite=settings.overwrite,
    )
    connection.close()
