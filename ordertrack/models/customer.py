"""客户模型"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from ..database.connection import Base


class Customer(Base):
    """客户表"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=True, index=True)
    email = Column(String(255), nullable=True)

    orders = relationship("Order", back_populates="customer")
