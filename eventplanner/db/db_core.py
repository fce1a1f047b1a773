"""Core database functionality and configuration.

This module provides database management with configuration, connection
pooling and transactional session handling. A Database is constructed by the
application factory and handed to the stores that need it.
"""

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, Engine, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..models.event import Event  # noqa
from ..models.session import StoredSession  # noqa
from ..config.environment import IS_PRODUCTION_ENVIRONMENT

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_PATH = Path(__file__).parent.parent.parent / 'data' / 'events.db'

class DatabaseConfig:
    """Database configuration settings."""
    
    def __init__(
        self,
        url: Optional[str] = None,
        sqlite_path: Optional[Path] = None,
        echo: bool = False,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        """
        Initialize database configuration.

        In production environment, DATABASE_URL must be set in environment variables
        or provided explicitly via the url parameter.

        Args:
            url: Full SQLAlchemy connection URL. Takes precedence over everything else.
            sqlite_path: Path to SQLite database file (for development)
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
                        (total connections = pool_size + max_overflow)
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled (prevent stale)
            pool_pre_ping: Whether to ping connections before using them

        Raises:
            ValueError: If in production environment and no database URL is provided
                      either via the url parameter or DATABASE_URL env variable
        """
        if url:
            self.url = url
        elif IS_PRODUCTION_ENVIRONMENT:
            self.url = os.environ.get('DATABASE_URL')
            if not self.url:
                raise ValueError(
                    "Database URL must be provided either via url parameter "
                    "or DATABASE_URL environment variable when in production environment"
                )
        else:
            path = Path(sqlite_path or os.environ.get('SQLITE_PATH', '') or DEFAULT_SQLITE_PATH)
            path.parent.mkdir(parents=True, exist_ok=True)
            self.url = f"sqlite:///{path}"
        
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping
    
    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @property
    def is_in_memory(self) -> bool:
        """True for SQLite databases that live only inside one connection."""
        return self.is_sqlite and (self.url in ('sqlite://', 'sqlite:///') or ':memory:' in self.url)

    @property
    def connection_url(self) -> str:
        """Get the database connection URL."""
        if not self.url:
            raise ValueError("Database URL not configured")
        return self.url
    
    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args = {"echo": self.echo}
        
        # SQLite-specific configuration
        if self.is_sqlite:
            args["connect_args"] = {"check_same_thread": False}
            # An in-memory database exists only on its one connection
            if self.is_in_memory:
                args["poolclass"] = StaticPool
        
        # PostgreSQL-specific configuration
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })
        
        return args

class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass

class ConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass

class SessionError(DatabaseError):
    """Raised when there are issues with database sessions."""
    pass

class Database:
    """Owns the engine and hands out transactional sessions."""
    
    def __init__(self, config: Optional[DatabaseConfig] = None):
        """Create the engine for the given (or default) configuration."""
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        self._session_factory = sessionmaker(expire_on_commit=False)
        self._tables_checked = False
        
        # Initialize engine on creation
        self._setup_engine()
    
    def _setup_engine(self) -> None:
        """Set up the SQLAlchemy engine."""
        try:
            self.engine = create_engine(
                self.config.connection_url,
                **self.config.get_engine_args()
            )
            self._session_factory.configure(bind=self.engine)
        except Exception as e:
            raise ConnectionError(f"Failed to create database engine: {e}") from e
    
    def init_db(self) -> None:
        """Initialize the database schema."""
        if not self.engine:
            raise ConnectionError("Database engine not initialized")
        
        try:
            Base.metadata.create_all(self.engine)
            self._tables_checked = True
            logger.info("Database schema initialized successfully")
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to initialize database schema: {e}") from e
    
    def ensure_tables_exist(self) -> None:
        """Ensure all required database tables exist."""
        if self._tables_checked:
            return
        if not self.engine:
            raise ConnectionError("Database engine not initialized")
        
        try:
            existing_tables = inspect(self.engine).get_table_names()
            required_tables = set(Base.metadata.tables)
            
            if not required_tables.issubset(existing_tables):
                logger.info("Some tables missing, initializing database schema")
                Base.metadata.create_all(self.engine)
                logger.info("Database schema initialized successfully")
            
            self._tables_checked = True
            
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to verify/create database schema: {e}") from e
    
    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.
        
        Commits when the block completes, rolls back on any exception and
        always closes the session.
        
        Example:
            with database.session() as session:
                event = session.get(Event, event_id)
                event.title = "New Title"
                # No need to call commit - it's handled automatically
        
        Raises:
            SessionError: If the database reports an error. Other exceptions
                          raised inside the block propagate unchanged.
        """
        self.ensure_tables_exist()
        
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Release all pooled connections."""
        if self.engine:
            self.engine.dispose()
