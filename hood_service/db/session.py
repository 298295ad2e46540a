from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from hood_service.core.config import settings

# The engine owns the connection pool for the configured database URL.
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

# One Session per request; callers commit explicitly.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always closed, even if the resolver raised.
        db.close()
