"""车间与设备模型"""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ..database.connection import Base


class Workshop(Base):
    """车间表"""
    __tablename__ = "workshops"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)

    equipment = relationship("Equipment", back_populates="workshop")


class Equipment(Base):
    """设备表"""
    __tablename__ = "equipment"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    workshop_id = Column(Integer, ForeignKey("workshops.id", ondelete="SET NULL"), nullable=True)

    workshop = relationship("Workshop", back_populates="equipment")
