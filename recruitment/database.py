from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from recruitment.core.config import settings, DatabaseType
from recruitment.core.logger_setup import setup_logger

# Setup logger for this module
logger = setup_logger(__name__)


class DatabaseConfig:
    def __init__(self, settings):
        """Initialize database configuration based on settings"""
        self.settings = settings
        self.connection_string = settings.DATABASE_URL

        try:
            self.engine = create_engine(
                self.connection_string,
                echo=settings.DEBUG,
                **self._engine_options()
            )

            # Create session factory
            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=self.engine
            )

            logger.info(f"Database engine created successfully for {settings.DATABASE_TYPE}")

        except Exception as e:
            logger.error(f"Error initializing database: {str(e)}")
            raise

    def _engine_options(self):
        """Pool options for the configured database type"""
        if self.settings.DATABASE_TYPE == DatabaseType.SQLITE.value:
            options = {"connect_args": {"check_same_thread": False}}
            # In-memory databases live on a single connection
            if self.connection_string in ("sqlite://", "sqlite:///:memory:"):
                options["poolclass"] = StaticPool
            return options

        return {
            "pool_pre_ping": True,
            "pool_size": 10,
            "max_overflow": 20,
            "pool_timeout": 30,
            "pool_recycle": 1800,
        }

    def get_db(self):
        """Database session dependency"""
        db = self.SessionLocal()
        try:
            yield db
        except SQLAlchemyError as e:
            logger.error(f"Database session error: {str(e)}")
            db.rollback()
            raise
        finally:
            db.close()

    def init_db(self, Base):
        """Initialize database by creating tables"""
        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Error creating database tables: {str(e)}")
            raise


# Initialize database configuration
db_config = DatabaseConfig(settings)

# Export key components
engine = db_config.engine
SessionLocal = db_config.SessionLocal
Base = declarative_base()
get_db = db_config.get_db
init_db = db_config.init_db
