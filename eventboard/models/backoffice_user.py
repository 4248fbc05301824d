"""
Backoffice user model - the actor recorded on moderation
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum

from eventboard.core.db import Base
from eventboard.domain.status import UserRole

class BackofficeUser(Base):
    __tablename__ = "backoffice_users"
    
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False, default="")
    role = Column(Enum(UserRole, native_enum=False, length=20, values_callable=lambda e: [r.value for r in e]),
                  nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    must_change_password = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_login_at = Column(DateTime, nullable=True)
    password_changed_at = Column(DateTime, nullable=True)
    
    def __init__(self, email, name, role):
        self.email = email
        self.name = name
        self.role = role
        self.password_hash = ""
        self.is_active = True
        self.must_change_password = True
        self.created_at = datetime.utcnow()
    
    def __repr__(self):
        return f"<BackofficeUser {self.email} ({self.role.value})>"
    
    def set_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self.password_changed_at = datetime.utcnow()
        self.must_change_password = False
    
    def activate(self) -> None:
        self.is_active = True
    
    def deactivate(self) -> None:
        self.is_active = False
    
    def force_password_change(self) -> None:
        self.must_change_password = True
    
    def record_login(self) -> None:
        self.last_login_at = datetime.utcnow()
