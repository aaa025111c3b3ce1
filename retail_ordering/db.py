from contextlib import contextmanager
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from retail_ordering.config import config
from retail_ordering.exceptions import ConfigError, PersistenceError, RetailError

logger = logging.getLogger(__name__)

class Database:
    """Database connection manager for the Retail Ordering System."""

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Database, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the database connection if not already initialized."""
        if self._initialized:
            return

        self._engine = None
        self._session_factory = None
        self._initialized = True

    def initialize(self, connection_string=None):
        """Initialize database connection.

        Args:
            connection_string: Optional database connection string.
                              If not provided, will use configuration.
        """
        if connection_string is None:
            connection_string = config.get_db_url()

        echo = config.get_boolean('DATABASE', 'echo', False)
        try:
            url = make_url(connection_string)
        except ArgumentError as e:
            raise ConfigError(f"Invalid database URL: {str(e)}", code='INVALID_DB_URL') from e

        if url.get_backend_name() == 'sqlite':
            engine_args = {'connect_args': {'check_same_thread': False}}
            if url.database in (None, '', ':memory:'):
                # One shared connection, otherwise every session sees an empty database
                engine_args['poolclass'] = StaticPool
        else:
            # Get connection pool settings
            engine_args = {
                'pool_size': config.get_int('DATABASE', 'pool_size', 10),
                'max_overflow': config.get_int('DATABASE', 'max_overflow', 20),
                'pool_timeout': config.get_int('DATABASE', 'pool_timeout', 30),
                'pool_recycle': config.get_int('DATABASE', 'pool_recycle', 1800),
                'pool_pre_ping': True
            }

        if self._engine is not None:
            self._engine.dispose()

        self._engine = create_engine(url, echo=echo, **engine_args)
        self._session_factory = sessionmaker(bind=self._engine, autoflush=False)

        logger.info(f"Database engine created for {url.render_as_string(hide_password=True)}")

    def create_all_tables(self):
        """Create all tables defined in the models."""
        from retail_ordering.models import Base
        Base.metadata.create_all(self.engine)

    def drop_all_tables(self):
        """Drop all tables from the database."""
        from retail_ordering.models import Base
        Base.metadata.drop_all(self.engine)

    @property
    def session(self):
        """Get the session factory."""
        if self._session_factory is None:
            self.initialize()
        return self._session_factory

    @property
    def engine(self):
        """Get the database engine."""
        if self._engine is None:
            self.initialize()
        return self._engine

    @contextmanager
    def session_scope(self):
        """Provide a transactional scope around a series of operations.

        Domain errors pass through untouched; driver errors surface as
        PersistenceError. Either way the transaction is rolled back.
        """
        session = self.session()
        try:
            yield session
            session.commit()
        except RetailError:
            session.rollback()
            raise
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Transaction rolled back: {str(e)}")
            raise PersistenceError(f"Database operation failed: {str(e)}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

# Global database instance
db = Database()

@contextmanager
def session_scope():
    """Session scope context manager."""
    with db.session_scope() as session:
        yield session
