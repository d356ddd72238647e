from sqlalchemy import Column, Integer, String, Boolean, false
from inventory_sales.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), nullable=False, unique=True)
    email = Column(String(60), nullable=False, unique=True)
    password = Column(String, nullable=False)  # bcrypt hash
    first_name = Column(String(30), nullable=False)
    last_name = Column(String(30), nullable=False)
    is_admin = Column(Boolean, default=False, server_default=false(), nullable=False)
