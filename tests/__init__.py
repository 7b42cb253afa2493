import os

# route tests to a throwaway in-memory database before any engine is built
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")
