from voyage.core.database.session import async_session, engine, get_db
from voyage.core.database.base import AgencyScopedModel, Base, BaseModel, BigIntPK

__all__ = ["async_session", "engine", "get_db", "Base", "BaseModel", "AgencyScopedModel", "BigIntPK"]
