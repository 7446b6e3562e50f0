from sqlmodel import SQLModel, create_engine, Session
from config.settings import DATABASE_URL

# ---------------------------------------------------------------------
# Database Engine Configuration
# ---------------------------------------------------------------------
def build_engine(database_url: str = DATABASE_URL):
    """Create an engine; SQLite gets its thread check relaxed, servers get a pool."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        echo=False,           # Set to True for SQL query debugging
        pool_size=10,         # Max number of DB connections in pool
        max_overflow=5,       # Allow 5 extra connections during peak load
        pool_recycle=300,     # Recycle connections every 5 min
        pool_pre_ping=True,   # Verify connection health before use
        pool_timeout=60       # Wait up to 60 seconds for a connection
    )


engine = build_engine()


# ---------------------------------------------------------------------
# Database Initialization
# ---------------------------------------------------------------------
def create_db_and_tables():
    """
    Create all database tables defined in SQLModel models.
    Should be called once at app startup (e.g., in main.py).
    """
    import database.models  # noqa: F401  (registers every table on the metadata)

    SQLModel.metadata.create_all(engine)


# ---------------------------------------------------------------------
# Dependency for FastAPI Routes (context-managed)
# ---------------------------------------------------------------------
def get_session():
    """
    Dependency for FastAPI endpoints: one session per request.
    Example:
        @router.get("/customers")
        def list_customers(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session


# ---------------------------------------------------------------------
# Direct Session for Scripts / Seeding
# ---------------------------------------------------------------------
def get_db_session() -> Session:
    """
    For non-FastAPI contexts (seed scripts, CLI).
    Returns a raw Session you must close manually.
    """
    return Session(engine)
